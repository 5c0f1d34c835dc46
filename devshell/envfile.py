from __future__ import annotations

import io
import re
from typing import NamedTuple

from dotenv.parser import parse_stream

from devshell.errors import DotenvParseError

NAME_RE = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')


class EnvFile(NamedTuple):
    fname: str
    values: dict[str, str]
    errors: tuple[DotenvParseError, ...]


def parse(fname: str, text: str) -> EnvFile:
    """parse `KEY=value` lines, malformed lines are collected, not raised"""
    values = {}
    errors = []
    for binding in parse_stream(io.StringIO(text)):
        if binding.error:
            statement = binding.original.string.strip()
            errors.append(
                DotenvParseError(
                    f'{fname}:{binding.original.line}: '
                    f'could not parse `{statement}`',
                ),
            )
        elif binding.key is None or binding.value is None:
            continue
        elif not NAME_RE.fullmatch(binding.key):
            errors.append(
                DotenvParseError(
                    f'{fname}:{binding.original.line}: '
                    f'invalid variable name `{binding.key}`',
                ),
            )
        else:
            values[binding.key] = binding.value
    return EnvFile(fname, values, tuple(errors))


def read(fname: str) -> EnvFile | None:
    """`None` when the file does not exist"""
    try:
        with open(fname, encoding='UTF-8') as f:
            text = f.read()
    except FileNotFoundError:
        return None
    else:
        return parse(fname, text)
