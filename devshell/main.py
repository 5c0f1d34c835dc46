from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from devshell.activate import activate
from devshell.context import render_exports
from devshell.context import ShellContext
from devshell.descriptor import load_file
from devshell.effects import ResolvedProvider
from devshell.errors import ActivationError
from devshell.hooks import PreCommitHooks
from devshell.registry import default_registry
from devshell.registry import DEFAULT_TOOLCHAINS
from devshell.resolve import resolve

DESCRIPTOR = 'devshell.yaml'
TOOLCHAINS_ENV = 'DEVSHELL_TOOLCHAINS'


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format='devshell: %(message)s',
        stream=sys.stderr,
    )


def _format_provider(provider: ResolvedProvider) -> str:
    if provider.version is None:
        return f'{provider.kind}\t{provider.name}'
    else:
        return f'{provider.kind}\t{provider.name}\t{provider.version}'


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            'activate the development environment declared in '
            f'{DESCRIPTOR}: prints shell statements for `eval`'
        ),
    )
    parser.add_argument(
        '--root',
        default='.',
        help='project root (default: %(default)s)',
    )
    parser.add_argument(
        '--config',
        help=f'descriptor file (default: {{root}}/{DESCRIPTOR})',
    )
    parser.add_argument(
        '--toolchains',
        default=os.environ.get(TOOLCHAINS_ENV, DEFAULT_TOOLCHAINS),
        help=(
            f'directory holding installed toolchains, as '
            f'{{toolchains}}/{{language}}/{{version}}/bin '
            f'(default: ${TOOLCHAINS_ENV} or {DEFAULT_TOOLCHAINS})'
        ),
    )
    parser.add_argument(
        '--pre-commit',
        default='pre-commit',
        help='pre-commit executable (default: %(default)s)',
    )
    parser.add_argument(
        '--resolve-only',
        action='store_true',
        help='print the resolved providers instead of activating',
    )
    parser.add_argument('-v', '--verbose', action='count', default=0)
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    root = os.path.abspath(args.root)
    config = args.config or os.path.join(root, DESCRIPTOR)

    try:
        descriptor = load_file(config)
        providers = resolve(descriptor, default_registry(args.toolchains))

        if args.resolve_only:
            for provider in providers:
                print(_format_provider(provider))
            return 0

        before = dict(os.environ)
        context = ShellContext(root, dict(before))
        hooks = PreCommitHooks(root, pre_commit=args.pre_commit)
        activate(providers, descriptor.dotenv, context=context, hooks=hooks)
    except ActivationError as e:
        raise SystemExit(f'devshell: error: {e}')

    sys.stdout.write(render_exports(before, context.environ))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
