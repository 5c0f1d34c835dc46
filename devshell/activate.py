from __future__ import annotations

import logging
import os.path
from collections.abc import Sequence
from typing import Any
from typing import NamedTuple

from devshell import envfile
from devshell.context import ShellContext
from devshell.descriptor import DEFAULT_DOTENV
from devshell.descriptor import DotenvConfig
from devshell.effects import Hook
from devshell.effects import InstallHook
from devshell.effects import PrependPath
from devshell.effects import ResolvedProvider
from devshell.effects import SetEnv
from devshell.hooks import HookStore

logger = logging.getLogger(__name__)


class ActivationResult(NamedTuple):
    path_added: tuple[str, ...]
    env_set: tuple[str, ...]
    hooks_installed: tuple[str, ...]
    env_loaded: tuple[str, ...]
    diagnostics: tuple[str, ...]


def _expose_toolchains(
        providers: Sequence[ResolvedProvider],
        context: ShellContext,
) -> tuple[list[str], list[str]]:
    path_added = []
    env_set = []
    for provider in providers:
        logger.info('exposing %s %s ...', provider.name, provider.version)
        for effect in provider.effects:
            if isinstance(effect, PrependPath):
                context.expose(effect.entry)
                path_added.append(effect.entry)
            elif isinstance(effect, SetEnv):
                context.setenv(effect.name, effect.value)
                env_set.append(effect.name)
            else:
                raise AssertionError(f'unexpected toolchain effect: {effect}')
    return path_added, env_set


def _install_hooks(hooks: Sequence[Hook], store: HookStore[Any]) -> None:
    snapshot = store.snapshot()
    try:
        store.install(hooks)
    except BaseException:
        store.restore(snapshot)
        raise


def _within(root: str, path: str) -> bool:
    root = os.path.realpath(root)
    return os.path.commonpath((root, os.path.realpath(path))) == root


def _load_dotenv(
        cfg: DotenvConfig,
        context: ShellContext,
) -> tuple[list[str], list[str]]:
    loaded: list[str] = []
    diagnostics: list[str] = []

    if not cfg.enabled:
        default = os.path.join(context.root, DEFAULT_DOTENV)
        if not cfg.disable_hint and os.path.exists(default):
            diagnostics.append(
                f'{DEFAULT_DOTENV} found but not loaded: set '
                f'`dotenv.enable: true` to load it '
                f'(`dotenv.disable_hint: true` silences this)',
            )
        return loaded, diagnostics

    for fname in cfg.filenames:
        path = os.path.join(context.root, fname)
        if not _within(context.root, path):
            diagnostics.append(f'{fname}: outside of the project root')
            continue

        try:
            parsed = envfile.read(path)
        except (OSError, UnicodeDecodeError) as e:
            diagnostics.append(f'{fname}: could not read: {e}')
            continue

        if parsed is None:
            logger.debug('%s does not exist, skipping', path)
            continue

        diagnostics.extend(str(e) for e in parsed.errors)
        for k, v in parsed.values.items():
            if context.is_set(k):
                logger.debug('%s: `%s` is already set', fname, k)
            else:
                context.setenv(k, v)
                loaded.append(k)

    return loaded, diagnostics


def activate(
        providers: Sequence[ResolvedProvider],
        dotenv: DotenvConfig,
        *,
        context: ShellContext,
        hooks: HookStore[Any],
) -> ActivationResult:
    """apply resolved providers: toolchains, then hooks, then env files

    a failure exposing toolchains or installing hooks restores the context
    and the hook store to their state before activation and re-raises.
    """
    toolchains = [p for p in providers if p.kind == 'toolchain']
    hook_list = []
    for provider in providers:
        if provider.kind != 'hook':
            continue
        for effect in provider.effects:
            if isinstance(effect, InstallHook):
                hook_list.append(effect.hook)
            else:
                raise AssertionError(f'unexpected hook effect: {effect}')

    before = context.snapshot()
    try:
        path_added, env_set = _expose_toolchains(toolchains, context)
        if hook_list:
            _install_hooks(hook_list, hooks)
    except BaseException:
        context.restore(before)
        raise

    env_loaded, diagnostics = _load_dotenv(dotenv, context)
    for diagnostic in diagnostics:
        logger.warning('%s', diagnostic)

    return ActivationResult(
        path_added=tuple(path_added),
        env_set=tuple(env_set),
        hooks_installed=tuple(hook.id for hook in hook_list),
        env_loaded=tuple(env_loaded),
        diagnostics=tuple(diagnostics),
    )
