from __future__ import annotations

import pathlib


def installed_toolchains(
        tmp_path: pathlib.Path,
        *installed: tuple[str, str],
) -> pathlib.Path:
    """lay out `{root}/{language}/{version}/bin` for each pair"""
    root = tmp_path.joinpath('toolchains')
    root.mkdir(exist_ok=True)
    for language, version in installed:
        root.joinpath(language, version, 'bin').mkdir(parents=True)
    return root
