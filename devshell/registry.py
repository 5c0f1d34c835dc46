"""the provider registry: name (+ version) -> installable specification

A registry is a snapshot: resolving against the same registry always yields
the same providers.  New languages or hooks are added by registering another
provider, the resolver never changes.
"""
from __future__ import annotations

import os.path
import re
from collections.abc import Mapping
from collections.abc import Sequence
from typing import NamedTuple
from typing import Protocol

from devshell.effects import Effect
from devshell.effects import Hook
from devshell.effects import InstallHook
from devshell.effects import Kind
from devshell.effects import PrependPath
from devshell.effects import ResolvedProvider
from devshell.effects import SetEnv
from devshell.schema._catalog import _Hook
from devshell.schema._catalog import _Toolchain
from devshell.schema.hooks import hooks as _hooks
from devshell.schema.languages import languages as _languages

DEFAULT_TOOLCHAINS = os.path.expanduser('~/.local/share/devshell/toolchains')

_NUMBER_RE = re.compile(r'\d+')


class Provider(Protocol):
    kind: Kind

    def resolve(
            self,
            name: str,
            version: str | None,
    ) -> ResolvedProvider | None: ...


def is_stable(version: str) -> bool:
    return '-' not in version


def version_key(version: str) -> tuple[tuple[int, ...], bool, str]:
    """numeric component-wise ordering, pre-releases before their release"""
    release, _, pre = version.partition('-')
    numbers = tuple(int(part) for part in _NUMBER_RE.findall(release))
    return (numbers, not pre, pre)


def latest_stable(versions: Sequence[str]) -> str | None:
    stable = [v for v in versions if is_stable(v)]
    if not stable:
        return None
    else:
        return max(stable, key=version_key)


class ToolchainCatalog:
    kind: Kind = 'toolchain'

    def __init__(
            self,
            prefix: str,
            *,
            _languages: Mapping[str, _Toolchain] = _languages,
    ) -> None:
        self.prefix = prefix
        self._languages = _languages

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.prefix!r})'

    def resolve(
            self,
            name: str,
            version: str | None,
    ) -> ResolvedProvider | None:
        try:
            spec = self._languages[name]
        except KeyError:
            return None

        if version is None:
            version = latest_stable(spec.versions)
            if version is None:
                return None
        elif version not in spec.versions:
            return None

        root = os.path.join(self.prefix, name, version)
        bindir = os.path.join(root, 'bin')
        effects: list[Effect] = [PrependPath(bindir)]
        for k, rel in spec.env.items():
            effects.append(SetEnv(k, os.path.join(root, rel) if rel else root))

        return ResolvedProvider(
            kind=self.kind,
            name=name,
            version=version,
            executable_refs=tuple(os.path.join(bindir, b) for b in spec.bins),
            effects=tuple(effects),
        )


class HookCatalog:
    kind: Kind = 'hook'

    def __init__(
            self,
            *,
            _hooks: Mapping[str, _Hook] = _hooks,
    ) -> None:
        self._hooks = _hooks

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'

    def resolve(
            self,
            name: str,
            version: str | None,
    ) -> ResolvedProvider | None:
        try:
            spec = self._hooks[name]
        except KeyError:
            return None

        hook = Hook(
            id=name,
            name=spec.name or name,
            entry=spec.entry,
            files=spec.files,
            types=spec.types,
            pass_filenames=spec.pass_filenames,
        )
        return ResolvedProvider(
            kind=self.kind,
            name=name,
            version=None,
            executable_refs=(spec.entry.split()[0],),
            effects=(InstallHook(hook),),
        )


class Registry(NamedTuple):
    toolchains: tuple[Provider, ...]
    hooks: tuple[Provider, ...]


def default_registry(toolchains: str = DEFAULT_TOOLCHAINS) -> Registry:
    return Registry(
        toolchains=(ToolchainCatalog(toolchains),),
        hooks=(HookCatalog(),),
    )
