from __future__ import annotations

import logging
from collections.abc import Sequence

from devshell.descriptor import EnvironmentDescriptor
from devshell.descriptor import HookConfig
from devshell.effects import InstallHook
from devshell.effects import ResolvedProvider
from devshell.errors import UnknownHookError
from devshell.errors import UnknownLanguageError
from devshell.registry import Provider
from devshell.registry import Registry

logger = logging.getLogger(__name__)


def _first(
        providers: Sequence[Provider],
        name: str,
        version: str | None,
) -> ResolvedProvider | None:
    for provider in providers:
        resolved = provider.resolve(name, version)
        if resolved is not None:
            return resolved
    else:
        return None


def _customize(
        resolved: ResolvedProvider,
        cfg: HookConfig,
) -> ResolvedProvider:
    effects = []
    for effect in resolved.effects:
        if isinstance(effect, InstallHook):
            hook = effect.hook
            if cfg.args is not None:
                hook = hook._replace(args=cfg.args)
            if cfg.files is not None:
                hook = hook._replace(files=cfg.files)
            if cfg.excludes is not None:
                hook = hook._replace(excludes=cfg.excludes)
            if cfg.stages is not None:
                hook = hook._replace(stages=cfg.stages)
            if cfg.pass_filenames is not None:
                hook = hook._replace(pass_filenames=cfg.pass_filenames)
            effect = InstallHook(hook)
        effects.append(effect)
    return resolved._replace(effects=tuple(effects))


def resolve(
        descriptor: EnvironmentDescriptor,
        registry: Registry,
) -> tuple[ResolvedProvider, ...]:
    ret = []

    for name, lang in descriptor.languages.items():
        if not lang.enabled:
            continue
        resolved = _first(registry.toolchains, name, lang.version)
        if resolved is None:
            if lang.version is None:
                raise UnknownLanguageError(f'unknown language `{name}`')
            else:
                raise UnknownLanguageError(
                    f'unknown language `{name}` (version `{lang.version}`)',
                )
        logger.debug('resolved %s %s', name, resolved.version)
        ret.append(resolved)

    for name, hook in descriptor.hooks.items():
        if not hook.enabled:
            continue
        resolved = _first(registry.hooks, name, None)
        if resolved is None:
            raise UnknownHookError(f'unknown hook `{name}`')
        logger.debug('resolved hook %s', name)
        ret.append(_customize(resolved, hook))

    return tuple(ret)
