"""Merge per-language translation definition files into one document."""

from .config import LocalizationConfig, load_config
from .discovery import DiscoveryResult, FileDiscovery
from .errors import (
    CacheError,
    ConfigError,
    DirectoryNotFoundError,
    FileLoadError,
    InvalidPathError,
    LocalizationError,
    MergeConflictError,
    PermissionDeniedError,
)
from .events import EventDispatcher, ExportCompletedEvent
from .export import LocalizationExport
from .exporter import LocalizationExporter
from .models import Classification, DefinitionFile, ExportFormat, KeyPath
from .resolver import KeyPathResolver

__all__ = [
    "CacheError",
    "Classification",
    "ConfigError",
    "DefinitionFile",
    "DirectoryNotFoundError",
    "DiscoveryResult",
    "EventDispatcher",
    "ExportCompletedEvent",
    "ExportFormat",
    "FileDiscovery",
    "FileLoadError",
    "InvalidPathError",
    "KeyPath",
    "KeyPathResolver",
    "LocalizationConfig",
    "LocalizationError",
    "LocalizationExport",
    "LocalizationExporter",
    "MergeConflictError",
    "PermissionDeniedError",
    "load_config",
]
