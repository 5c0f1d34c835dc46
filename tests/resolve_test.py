from __future__ import annotations

import pytest

from devshell.descriptor import EnvironmentDescriptor
from devshell.descriptor import load
from devshell.effects import Hook
from devshell.effects import InstallHook
from devshell.effects import Kind
from devshell.effects import ResolvedProvider
from devshell.errors import UnknownHookError
from devshell.errors import UnknownLanguageError
from devshell.registry import default_registry
from devshell.registry import Registry
from devshell.resolve import resolve
from devshell.schema._catalog import toolchain
from devshell.testing import override_languages


def _descriptor(*, rust: bool = True) -> EnvironmentDescriptor:
    return load({
        'languages': {'rust': {'enable': rust}},
        'hooks': {'rustfmt': {'enable': True}, 'clippy': {'enable': True}},
        'dotenv': {'enable': True, 'filename': '.env'},
    })


def _summary(
        providers: tuple[ResolvedProvider, ...],
) -> list[tuple[Kind, str]]:
    return [(p.kind, p.name) for p in providers]


def _hook(provider: ResolvedProvider) -> Hook:
    effect, = provider.effects
    assert isinstance(effect, InstallHook)
    return effect.hook


def test_resolve_scenario() -> None:
    providers = resolve(_descriptor(), default_registry('/tc'))
    assert _summary(providers) == [
        ('toolchain', 'rust'),
        ('hook', 'rustfmt'),
        ('hook', 'clippy'),
    ]


def test_resolve_language_disabled() -> None:
    providers = resolve(_descriptor(rust=False), default_registry('/tc'))
    assert _summary(providers) == [('hook', 'rustfmt'), ('hook', 'clippy')]


def test_resolve_is_deterministic() -> None:
    registry = default_registry('/tc')
    assert resolve(_descriptor(), registry) == resolve(_descriptor(), registry)


def test_resolve_follows_the_registry_snapshot() -> None:
    descriptor = load({'languages': {'rust': {'enable': True}}})
    pinned = {'rust': toolchain('cargo', versions=('1.70.0', '1.71.1'))}

    with override_languages(pinned, clear=True):
        first = resolve(descriptor, default_registry('/tc'))
        second = resolve(descriptor, default_registry('/tc'))

    assert first == second
    provider, = first
    assert provider.version == '1.71.1'


def test_resolve_requested_version() -> None:
    raw = {'languages': {'rust': {'enable': True, 'version': '1.81.0'}}}
    descriptor = load(raw)
    provider, = resolve(descriptor, default_registry('/tc'))
    assert provider.version == '1.81.0'


def test_resolve_toolchains_before_hooks_in_declaration_order() -> None:
    descriptor = load({
        'hooks': {'gofmt': {'enable': True}, 'rustfmt': {'enable': True}},
        'languages': {'go': {'enable': True}, 'rust': {'enable': True}},
    })
    providers = resolve(descriptor, default_registry('/tc'))
    assert _summary(providers) == [
        ('toolchain', 'go'),
        ('toolchain', 'rust'),
        ('hook', 'gofmt'),
        ('hook', 'rustfmt'),
    ]


def test_resolve_unknown_language() -> None:
    descriptor = load({'languages': {'cobol': {'enable': True}}})

    with pytest.raises(UnknownLanguageError) as excinfo:
        resolve(descriptor, default_registry('/tc'))
    msg, = excinfo.value.args
    assert msg == 'unknown language `cobol`'


def test_resolve_unknown_version() -> None:
    raw = {'languages': {'rust': {'enable': True, 'version': '0.1'}}}
    descriptor = load(raw)

    with pytest.raises(UnknownLanguageError) as excinfo:
        resolve(descriptor, default_registry('/tc'))
    msg, = excinfo.value.args
    assert msg == 'unknown language `rust` (version `0.1`)'


def test_resolve_unknown_hook() -> None:
    descriptor = load({'hooks': {'definitely-not-a-hook': {'enable': True}}})

    with pytest.raises(UnknownHookError) as excinfo:
        resolve(descriptor, default_registry('/tc'))
    msg, = excinfo.value.args
    assert msg == 'unknown hook `definitely-not-a-hook`'


def test_resolve_disabled_entries_are_not_looked_up() -> None:
    descriptor = load({
        'languages': {'cobol': {'enable': False}},
        'hooks': {'definitely-not-a-hook': {'enable': False}},
    })
    assert resolve(descriptor, default_registry('/tc')) == ()


def test_resolve_hook_options_override_defaults() -> None:
    descriptor = load({
        'hooks': {
            'clippy': {
                'enable': True,
                'args': ['--fix'],
                'excludes': ['^vendor/'],
                'stages': ['pre-push'],
                'pass_filenames': True,
            },
            'rustfmt': {'enable': True, 'files': r'^src/.*\.rs$'},
        },
    })
    clippy, rustfmt = resolve(descriptor, default_registry('/tc'))

    assert _hook(clippy) == Hook(
        id='clippy',
        name='clippy',
        entry='cargo clippy --offline --all-targets -- -D warnings',
        files=r'\.rs$',
        excludes=('^vendor/',),
        pass_filenames=True,
        args=('--fix',),
        stages=('pre-push',),
    )
    assert _hook(rustfmt).files == r'^src/.*\.rs$'
    assert _hook(rustfmt).pass_filenames is False


class _Fixed:
    kind: Kind = 'toolchain'

    def __init__(self, name: str, version: str) -> None:
        self.name = name
        self.version = version

    def resolve(
            self,
            name: str,
            version: str | None,
    ) -> ResolvedProvider | None:
        if name != self.name:
            return None
        return ResolvedProvider('toolchain', name, self.version, (), ())


def test_resolve_first_provider_wins() -> None:
    registry = Registry(
        toolchains=(_Fixed('zig', '0.13.0'), _Fixed('zig', '0.12.0')),
        hooks=(),
    )
    descriptor = load({'languages': {'zig': {'enable': True}}})
    provider, = resolve(descriptor, registry)
    assert provider.version == '0.13.0'


def test_resolve_falls_through_providers() -> None:
    registry = Registry(
        toolchains=(_Fixed('zig', '0.13.0'), _Fixed('odin', 'dev-2024-11')),
        hooks=(),
    )
    descriptor = load({'languages': {'odin': {'enable': True}}})
    provider, = resolve(descriptor, registry)
    assert provider.version == 'dev-2024-11'
