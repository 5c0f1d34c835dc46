from __future__ import annotations

from devshell.activate import activate
from devshell.activate import ActivationResult
from devshell.context import ShellContext
from devshell.descriptor import DotenvConfig
from devshell.descriptor import EnvironmentDescriptor
from devshell.descriptor import HookConfig
from devshell.descriptor import LanguageConfig
from devshell.descriptor import load
from devshell.descriptor import load_file
from devshell.effects import ResolvedProvider
from devshell.errors import ActivationError
from devshell.errors import DotenvParseError
from devshell.errors import ProviderInstallError
from devshell.errors import SchemaError
from devshell.errors import UnknownHookError
from devshell.errors import UnknownLanguageError
from devshell.registry import default_registry
from devshell.registry import Registry
from devshell.resolve import resolve

__all__ = [
    'activate',
    'ActivationError',
    'ActivationResult',
    'default_registry',
    'DotenvConfig',
    'DotenvParseError',
    'EnvironmentDescriptor',
    'HookConfig',
    'LanguageConfig',
    'load',
    'load_file',
    'ProviderInstallError',
    'Registry',
    'resolve',
    'ResolvedProvider',
    'SchemaError',
    'ShellContext',
    'UnknownHookError',
    'UnknownLanguageError',
]
