from __future__ import annotations

import logging
import os
import shlex
from collections.abc import Mapping
from collections.abc import MutableMapping

from devshell.envfile import NAME_RE
from devshell.errors import ProviderInstallError

logger = logging.getLogger(__name__)


class ShellContext:
    """the process state an activation is applied to

    every mutation goes through here: pass a plain `dict` as `environ` to
    activate without touching the real process environment.
    """

    def __init__(
            self,
            root: str,
            environ: MutableMapping[str, str],
    ) -> None:
        self.root = root
        self.environ = environ

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.root!r})'

    @property
    def search_path(self) -> list[str]:
        return [p for p in self.environ.get('PATH', '').split(os.pathsep) if p]

    def expose(self, entry: str) -> None:
        """move `entry` to the front of the search path"""
        if not os.path.isdir(entry):
            raise ProviderInstallError(
                f'toolchain directory not found: {entry}',
            )
        rest = [p for p in self.search_path if p != entry]
        self.environ['PATH'] = os.pathsep.join((entry, *rest))

    def is_set(self, name: str) -> bool:
        return name in self.environ

    def setenv(self, name: str, value: str) -> None:
        self.environ[name] = value

    def snapshot(self) -> dict[str, str]:
        return dict(self.environ)

    def restore(self, snapshot: Mapping[str, str]) -> None:
        for k in tuple(self.environ):
            if k not in snapshot:
                del self.environ[k]
        for k, v in snapshot.items():
            if self.environ.get(k) != v:
                self.environ[k] = v


def render_exports(
        before: Mapping[str, str],
        after: Mapping[str, str],
) -> str:
    """shell statements turning `before` into `after`, suitable for `eval`"""
    lines = []
    for k in sorted(before.keys() | after.keys()):
        if before.get(k) == after.get(k):
            continue
        elif not NAME_RE.fullmatch(k):
            logger.warning('not exporting invalid variable name `%s`', k)
        elif k not in after:
            lines.append(f'unset {k}')
        elif before.get(k) != after[k]:
            lines.append(f'export {k}={shlex.quote(after[k])}')
    return ''.join(f'{line}\n' for line in lines)
