from __future__ import annotations

from typing import LiteralString

from devshell.schema._catalog import _Hook
from devshell.schema._catalog import hook


hooks: dict[LiteralString, _Hook] = {
    'rustfmt': hook(
        'cargo fmt -- --check --color always',
        files=r'\.rs$',
        pass_filenames=False,
    ),
    'clippy': hook(
        'cargo clippy --offline --all-targets -- -D warnings',
        files=r'\.rs$',
        pass_filenames=False,
    ),
    'cargo-check': hook(
        'cargo check',
        name='cargo check',
        files=r'\.rs$',
        pass_filenames=False,
    ),
    'gofmt': hook('gofmt -l -w', types=('go',)),
    'govet': hook('go vet', name='go vet', types=('go',)),
    'ruff': hook('ruff check --force-exclude', types=('python',)),
    'black': hook('black', types=('python',)),
    'prettier': hook('prettier --write --list-different --ignore-unknown'),
    'shellcheck': hook('shellcheck', types=('shell',)),
}
