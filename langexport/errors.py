"""Exception hierarchy raised while exporting localization files."""

from __future__ import annotations


class LocalizationError(Exception):
    """Base class for every failure that aborts an export."""


class ConfigError(LocalizationError):
    """Raised when the configuration file cannot be parsed."""


class DirectoryNotFoundError(LocalizationError, FileNotFoundError):
    """The language root directory does not exist."""


class PermissionDeniedError(LocalizationError, PermissionError):
    """A file or directory under the language root could not be read."""


class InvalidPathError(LocalizationError):
    """A definition file sits at a depth that cannot be mapped to a language."""


class FileLoadError(LocalizationError):
    """A definition file could not be read or did not contain a mapping."""


class MergeConflictError(LocalizationError):
    """A merge would overwrite a non-mapping value with nested translations."""


class CacheError(LocalizationError):
    """The cache store failed to read or write an entry."""


__all__ = [
    "CacheError",
    "ConfigError",
    "DirectoryNotFoundError",
    "FileLoadError",
    "InvalidPathError",
    "LocalizationError",
    "MergeConflictError",
    "PermissionDeniedError",
]
