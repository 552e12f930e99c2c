"""Exception and warning types raised by the domainer registry."""

from __future__ import annotations


class DomainerError(Exception):
    """Base exception for domainer errors."""
    pass


class ConfigurationError(DomainerError):
    """Raised when the option schema or service configuration is invalid."""
    pass


class StorageError(DomainerError):
    """Raised when the persistence backend fails to read or write a blob."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class UnsupportedOptionError(DomainerError, KeyError):
    """Raised in strict mode when an option is not in the whitelist."""

    def __init__(self, option: str):
        super().__init__(option)
        self.option = option

    def __str__(self) -> str:
        return f"The option '{self.option}' is not supported"


class UnsupportedOptionWarning(UserWarning):
    """Emitted when an option outside the whitelist is read or written."""
    pass
