from __future__ import annotations

import os.path
import posixpath
import types
from collections.abc import Mapping
from typing import Any
from typing import NamedTuple

import yaml

from devshell.errors import SchemaError

DEFAULT_DOTENV = '.env'


class LanguageConfig(NamedTuple):
    enabled: bool
    version: str | None = None


class HookConfig(NamedTuple):
    enabled: bool
    args: tuple[str, ...] | None = None
    files: str | None = None
    excludes: tuple[str, ...] | None = None
    stages: tuple[str, ...] | None = None
    pass_filenames: bool | None = None


class DotenvConfig(NamedTuple):
    enabled: bool = False
    filenames: tuple[str, ...] = (DEFAULT_DOTENV,)
    disable_hint: bool = False


class EnvironmentDescriptor(NamedTuple):
    languages: Mapping[str, LanguageConfig]
    hooks: Mapping[str, HookConfig]
    dotenv: DotenvConfig


def _type_name(v: object) -> str:
    return {
        bool: 'boolean',
        str: 'string',
        list: 'list',
        dict: 'mapping',
    }.get(type(v), type(v).__name__)


def _mapping(path: str, v: object) -> dict[str, Any]:
    if not isinstance(v, dict):
        raise SchemaError(f'`{path}`: expected mapping, got {_type_name(v)}')
    for k in v:
        if not isinstance(k, str):
            raise SchemaError(f'`{path}`: expected string keys, got `{k!r}`')
    return v


def _check_keys(
        path: str,
        d: dict[str, Any],
        allowed: tuple[str, ...],
) -> None:
    for k in d:
        if k not in allowed:
            where = f'{path}.{k}' if path else k
            raise SchemaError(f'unknown key `{where}`')


def _bool(path: str, v: object) -> bool:
    if not isinstance(v, bool):
        raise SchemaError(f'`{path}`: expected boolean, got `{v!r}`')
    return v


def _str(path: str, v: object) -> str:
    if not isinstance(v, str):
        raise SchemaError(f'`{path}`: expected string, got `{v!r}`')
    return v


def _str_list(path: str, v: object) -> tuple[str, ...]:
    if not isinstance(v, list):
        raise SchemaError(f'`{path}`: expected list of strings, got `{v!r}`')
    return tuple(_str(f'{path}[{i}]', item) for i, item in enumerate(v))


def _required(path: str, d: dict[str, Any], key: str) -> object:
    try:
        return d[key]
    except KeyError:
        raise SchemaError(f'missing required key `{path}.{key}`')


def _language(path: str, raw: object) -> LanguageConfig:
    d = _mapping(path, raw)
    _check_keys(path, d, ('enable', 'version'))
    enabled = _bool(f'{path}.enable', _required(path, d, 'enable'))
    if 'version' in d:
        version = _str(f'{path}.version', d['version'])
        if not version:
            raise SchemaError(f'`{path}.version`: expected non-empty string')
        return LanguageConfig(enabled, version)
    else:
        return LanguageConfig(enabled)


def _hook(path: str, raw: object) -> HookConfig:
    d = _mapping(path, raw)
    _check_keys(
        path, d,
        ('enable', 'args', 'files', 'excludes', 'stages', 'pass_filenames'),
    )
    cfg = HookConfig(_bool(f'{path}.enable', _required(path, d, 'enable')))
    if 'args' in d:
        cfg = cfg._replace(args=_str_list(f'{path}.args', d['args']))
    if 'files' in d:
        cfg = cfg._replace(files=_str(f'{path}.files', d['files']))
    if 'excludes' in d:
        excludes = _str_list(f'{path}.excludes', d['excludes'])
        cfg = cfg._replace(excludes=excludes)
    if 'stages' in d:
        cfg = cfg._replace(stages=_str_list(f'{path}.stages', d['stages']))
    if 'pass_filenames' in d:
        pass_filenames = _bool(f'{path}.pass_filenames', d['pass_filenames'])
        cfg = cfg._replace(pass_filenames=pass_filenames)
    return cfg


def _dotenv_filename(path: str, v: object) -> str:
    fname = _str(path, v)
    if not fname:
        raise SchemaError(f'`{path}`: expected non-empty string')
    normalized = posixpath.normpath(fname.replace(os.sep, '/'))
    if (
            os.path.isabs(fname) or
            posixpath.isabs(normalized) or
            normalized == '..' or
            normalized.startswith('../')
    ):
        raise SchemaError(
            f'`{path}`: must be inside the project root, got `{fname}`',
        )
    return fname


def _dotenv(raw: object) -> DotenvConfig:
    d = _mapping('dotenv', raw)
    _check_keys('dotenv', d, ('enable', 'filename', 'disable_hint'))
    enabled = _bool('dotenv.enable', _required('dotenv', d, 'enable'))
    cfg = DotenvConfig(enabled)
    if 'filename' in d:
        v = d['filename']
        if isinstance(v, list):
            if not v:
                raise SchemaError('`dotenv.filename`: expected at least one')
            filenames = tuple(
                _dotenv_filename(f'dotenv.filename[{i}]', item)
                for i, item in enumerate(v)
            )
        else:
            filenames = (_dotenv_filename('dotenv.filename', v),)
        cfg = cfg._replace(filenames=filenames)
    if 'disable_hint' in d:
        disable_hint = _bool('dotenv.disable_hint', d['disable_hint'])
        cfg = cfg._replace(disable_hint=disable_hint)
    return cfg


def _hooks_section(d: dict[str, Any]) -> object:
    if 'hooks' in d and 'git-hooks' in d:
        raise SchemaError('expected only one of `hooks` and `git-hooks.hooks`')
    elif 'git-hooks' in d:
        git_hooks = _mapping('git-hooks', d['git-hooks'])
        _check_keys('git-hooks', git_hooks, ('hooks',))
        return git_hooks.get('hooks', {})
    else:
        return d.get('hooks', {})


def load(raw: object) -> EnvironmentDescriptor:
    """validate a parsed descriptor (an attribute tree of plain values)

    `None` (an empty document) is an empty descriptor.
    """
    if raw is None:
        raw = {}
    d = _mapping('<top-level>', raw)
    _check_keys('', d, ('languages', 'hooks', 'git-hooks', 'dotenv'))

    languages = {
        name: _language(f'languages.{name}', v)
        for name, v in _mapping('languages', d.get('languages', {})).items()
    }
    hooks_path = 'git-hooks.hooks' if 'git-hooks' in d else 'hooks'
    hooks = {
        name: _hook(f'{hooks_path}.{name}', v)
        for name, v in _mapping(hooks_path, _hooks_section(d)).items()
    }
    if 'dotenv' in d:
        dotenv = _dotenv(d['dotenv'])
    else:
        dotenv = DotenvConfig()

    return EnvironmentDescriptor(
        languages=types.MappingProxyType(languages),
        hooks=types.MappingProxyType(hooks),
        dotenv=dotenv,
    )


def load_file(fname: str) -> EnvironmentDescriptor:
    try:
        with open(fname, encoding='UTF-8') as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        raise SchemaError(f'descriptor not found: {fname}')
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaError(f'could not read: {fname}: {e}')
    except yaml.YAMLError as e:
        raise SchemaError(f'invalid YAML: {fname}: {e}')

    if raw is not None and not isinstance(raw, dict):
        raise SchemaError(f'expected top-level mapping: {fname}')

    try:
        return load(raw)
    except SchemaError as e:
        msg, = e.args
        raise SchemaError(f'{msg}: {fname}') from None
