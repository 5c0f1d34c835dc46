from __future__ import annotations


class ActivationError(Exception):
    """base class for every error raised by devshell"""


class SchemaError(ActivationError):
    """the descriptor is malformed"""


class UnknownLanguageError(ActivationError):
    pass


class UnknownHookError(ActivationError):
    pass


class ProviderInstallError(ActivationError):
    """a resolved provider could not be applied"""


class DotenvParseError(ActivationError):
    """non-fatal: reported as a diagnostic, never raised out of activation"""
