from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Sequence
from typing import Any
from typing import Protocol
from typing import TypeVar

import yaml
from devenv.lib import proc

from devshell.effects import Hook
from devshell.errors import ProviderInstallError

logger = logging.getLogger(__name__)

CONFIG = '.pre-commit-config.yaml'


Snapshot = TypeVar('Snapshot')


class HookStore(Protocol[Snapshot]):
    def snapshot(self) -> Snapshot: ...

    def restore(self, snapshot: Snapshot) -> None: ...

    def install(self, hooks: Sequence[Hook]) -> None: ...


def _local_repo(cfg: dict[str, Any]) -> dict[str, Any]:
    for i, repo in enumerate(cfg['repos']):
        if isinstance(repo, dict) and repo.get('repo') == 'local':
            cfg['repos'][i] = repo = dict(repo)
            return repo
    else:
        repo = {'repo': 'local', 'hooks': []}
        cfg['repos'].append(repo)
        return repo


def merged(cfg: dict[str, Any], hooks: Sequence[Hook]) -> dict[str, Any]:
    """upsert `hooks` into the `repo: local` section, by id

    hooks already present keep their position, new hooks are appended in
    declaration order.
    """
    cfg = {**cfg, 'repos': list(cfg.get('repos') or [])}
    local = _local_repo(cfg)
    local_hooks = list(local.get('hooks') or [])
    positions = {
        h.get('id'): i
        for i, h in enumerate(local_hooks)
        if isinstance(h, dict)
    }
    for hook in hooks:
        entry = hook.to_config()
        if hook.id in positions:
            local_hooks[positions[hook.id]] = entry
        else:
            positions[hook.id] = len(local_hooks)
            local_hooks.append(entry)
    local['hooks'] = local_hooks
    return cfg


class PreCommitHooks:
    """manages `.pre-commit-config.yaml` and the git hook shim"""

    def __init__(
            self,
            root: str,
            *,
            pre_commit: str = 'pre-commit',
    ) -> None:
        self.root = root
        self.pre_commit = pre_commit
        self.config = os.path.join(root, CONFIG)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.root!r})'

    def snapshot(self) -> bytes | None:
        try:
            with open(self.config, 'rb') as f:
                return f.read()
        except FileNotFoundError:
            return None

    def restore(self, snapshot: bytes | None) -> None:
        if snapshot is None:
            try:
                os.remove(self.config)
            except FileNotFoundError:
                pass
        else:
            self._write(snapshot)

    def _read(self) -> dict[str, Any]:
        contents = self.snapshot()
        if contents is None:
            return {'repos': []}

        try:
            cfg = yaml.safe_load(contents)
        except yaml.YAMLError as e:
            raise ProviderInstallError(f'invalid YAML: {self.config}: {e}')
        if cfg is None:
            return {'repos': []}
        elif not isinstance(cfg, dict):
            raise ProviderInstallError(
                f'expected top-level mapping: {self.config}',
            )
        elif not isinstance(cfg.get('repos', []), list):
            raise ProviderInstallError(
                f'expected top-level `repos:` list: {self.config}',
            )
        return cfg

    def _write(self, contents: bytes) -> None:
        # write + rename so concurrent activations never see a partial file
        fd, tmp = tempfile.mkstemp(dir=self.root, prefix=f'{CONFIG}.')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(contents)
            os.chmod(tmp, 0o644)
            os.replace(tmp, self.config)
        except BaseException:
            os.remove(tmp)
            raise

    def install(self, hooks: Sequence[Hook]) -> None:
        before = self.snapshot()
        cfg = merged(self._read(), hooks)
        contents = yaml.safe_dump(cfg, sort_keys=False).encode()
        if contents != before:
            logger.info('writing %s ...', self.config)
            self._write(contents)

        logger.info('installing pre-commit hooks ...')
        try:
            # stdout is the caller's (it is `eval`ed), keep output off it
            out = proc.run(
                (self.pre_commit, 'install'),
                cwd=self.root,
                stdout=True,
            )
        except (OSError, RuntimeError) as e:
            raise ProviderInstallError(
                f'`{self.pre_commit} install` failed: {e}',
            )
        if isinstance(out, str) and out.strip():
            logger.info('%s', out.strip())
