"""helpers for testing code built on devshell

    from devshell.testing import override_languages
    from devshell.schema._catalog import toolchain

    with override_languages({'zig': toolchain('zig', versions=('0.13.0',))}):
        # default_registry() now resolves `zig`
        ...
"""
from __future__ import annotations

import contextlib
from collections.abc import Generator
from collections.abc import Mapping
from collections.abc import Sequence
from unittest import mock

from devshell.effects import Hook
from devshell.errors import ProviderInstallError
from devshell.schema._catalog import _Hook
from devshell.schema._catalog import _Toolchain
from devshell.schema.hooks import hooks as _hooks
from devshell.schema.languages import languages as _languages


@contextlib.contextmanager
def override_languages(
        overrides: Mapping[str, _Toolchain],
        *,
        clear: bool = False,
) -> Generator[None]:
    """replace (or with `clear=True`: pin) the built-in toolchain catalog"""
    for name, v in overrides.items():
        if not isinstance(v, _Toolchain):
            raise ValueError(
                f'expected `toolchain(...)` for language `{name}`, '
                f'got `{v!r}`',
            )

    with mock.patch.dict(_languages, overrides, clear=clear):
        yield


@contextlib.contextmanager
def override_hooks(
        overrides: Mapping[str, _Hook],
        *,
        clear: bool = False,
) -> Generator[None]:
    """replace (or with `clear=True`: pin) the built-in hook catalog"""
    for name, v in overrides.items():
        if not isinstance(v, _Hook):
            raise ValueError(
                f'expected `hook(...)` for hook `{name}`, got `{v!r}`',
            )

    with mock.patch.dict(_hooks, overrides, clear=clear):
        yield


class MemoryHookStore:
    """a hook store which only records what was installed"""

    def __init__(self, *, fail: bool = False) -> None:
        self.hooks: dict[str, Hook] = {}
        self.installs = 0
        self.fail = fail

    def snapshot(self) -> dict[str, Hook]:
        return dict(self.hooks)

    def restore(self, snapshot: dict[str, Hook]) -> None:
        self.hooks = dict(snapshot)

    def install(self, hooks: Sequence[Hook]) -> None:
        for hook in hooks:
            self.hooks[hook.id] = hook
        self.installs += 1
        if self.fail:
            raise ProviderInstallError('hook installation failed')
