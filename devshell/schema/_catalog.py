from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple


class _Toolchain(NamedTuple):
    """not intended to be constructed directly"""
    bins: tuple[str, ...]
    versions: tuple[str, ...]
    # values are relative to the toolchain prefix
    env: Mapping[str, str]


class _Hook(NamedTuple):
    """not intended to be constructed directly"""
    entry: str
    name: str
    files: str
    types: tuple[str, ...]
    pass_filenames: bool


def toolchain(
        *bins: str,
        versions: tuple[str, ...],
        env: Mapping[str, str] | None = None,
) -> _Toolchain:
    """usage: toolchain('cargo', 'rustc', versions=('1.82.0',))"""
    if not versions:
        raise ValueError('a toolchain needs at least one known version')
    return _Toolchain(bins=bins, versions=versions, env=dict(env or {}))


def hook(
        entry: str,
        *,
        name: str = '',
        files: str = '',
        types: tuple[str, ...] = (),
        pass_filenames: bool = True,
) -> _Hook:
    """usage: hook('cargo fmt -- --check', files=r'\\.rs$')"""
    return _Hook(
        entry=entry,
        name=name,
        files=files,
        types=types,
        pass_filenames=pass_filenames,
    )
