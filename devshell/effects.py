from __future__ import annotations

from typing import Any
from typing import Literal
from typing import NamedTuple

Kind = Literal['toolchain', 'hook']


class Hook(NamedTuple):
    id: str
    name: str
    entry: str
    language: str = 'system'
    files: str = ''
    excludes: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    pass_filenames: bool = True
    args: tuple[str, ...] = ()
    stages: tuple[str, ...] = ()

    def to_config(self) -> dict[str, Any]:
        """the `.pre-commit-config.yaml` representation"""
        ret: dict[str, Any] = {
            'id': self.id,
            'name': self.name,
            'entry': self.entry,
            'language': self.language,
        }
        if self.files:
            ret['files'] = self.files
        if self.excludes:
            # pre-commit takes a single regex
            ret['exclude'] = '|'.join(f'(?:{e})' for e in self.excludes)
        if self.types:
            ret['types'] = list(self.types)
        if not self.pass_filenames:
            ret['pass_filenames'] = False
        if self.args:
            ret['args'] = list(self.args)
        if self.stages:
            ret['stages'] = list(self.stages)
        return ret


class PrependPath(NamedTuple):
    entry: str


class SetEnv(NamedTuple):
    name: str
    value: str


class InstallHook(NamedTuple):
    hook: Hook


Effect = PrependPath | SetEnv | InstallHook


class ResolvedProvider(NamedTuple):
    kind: Kind
    name: str
    version: str | None
    executable_refs: tuple[str, ...]
    effects: tuple[Effect, ...]
