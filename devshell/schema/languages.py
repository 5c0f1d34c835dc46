from __future__ import annotations

from typing import LiteralString

from devshell.schema._catalog import _Toolchain
from devshell.schema._catalog import toolchain


languages: dict[LiteralString, _Toolchain] = {
    'rust': toolchain(
        'cargo',
        'cargo-clippy',
        'cargo-fmt',
        'clippy-driver',
        'rust-analyzer',
        'rustc',
        'rustfmt',
        versions=(
            '1.80.1',
            '1.81.0',
            '1.82.0',
            '1.83.0',
            '1.84.0-beta.3',
        ),
        env={'RUST_SRC_PATH': 'lib/rustlib/src/rust/library'},
    ),
    'go': toolchain(
        'go',
        'gofmt',
        versions=('1.22.9', '1.23.3', '1.24.0-rc.1'),
        env={'GOROOT': ''},
    ),
    'python': toolchain(
        'python3',
        'pip3',
        versions=('3.11.10', '3.12.7', '3.13.0', '3.14.0-a1'),
    ),
    'javascript': toolchain(
        'node',
        'npm',
        'npx',
        versions=('20.18.0', '22.11.0', '23.2.0'),
    ),
}
