"""Configuration loading for langexport (.langexport.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .discovery import DEFAULT_SUFFIXES
from .errors import ConfigError
from .models import ExportFormat

CONFIG_FILENAME = ".langexport.yml"


@dataclass
class CacheConfig:
    """Cache settings for merged documents."""

    key: str = "localization.array"
    timeout: int = 60
    driver: str = "file"
    path: Optional[Path] = None


@dataclass
class ParserConfig:
    """How definition files map onto the merged document."""

    include_folder_path_in_structure: bool = False
    format: ExportFormat = ExportFormat.NORMAL


@dataclass
class ExportConfig:
    """Target for `langexport export`."""

    filepath: Optional[Path] = None
    variable: str = "messages"
    flat: bool = False


@dataclass
class LocalizationConfig:
    """Represents the settings defined in .langexport.yml."""

    root: Path
    lang_path: Optional[Path] = None
    definition_suffixes: List[str] = field(default_factory=lambda: list(DEFAULT_SUFFIXES))
    caches: CacheConfig = field(default_factory=CacheConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    def __post_init__(self) -> None:
        if self.lang_path is None:
            self.lang_path = self.root / "lang"
        if self.caches.path is None:
            self.caches.path = self.root / ".langexport" / "cache.json"
        if self.export.filepath is None:
            self.export.filepath = self.root / "public" / "js" / "messages.js"


def load_config(config_path: Path) -> LocalizationConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return LocalizationConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    lang_path_str = _as_str(data.get("lang_path"))
    suffixes = _as_str_list(data.get("definition_suffixes")) or list(DEFAULT_SUFFIXES)

    cache_data = _as_dict(data.get("caches"))
    caches = CacheConfig()
    if cache_data:
        caches.key = _as_str(cache_data.get("key")) or caches.key
        timeout = _as_int(cache_data.get("timeout"))
        if timeout is not None:
            if timeout < 0:
                raise ConfigError("caches.timeout must not be negative")
            caches.timeout = timeout
        caches.driver = _as_str(cache_data.get("driver")) or caches.driver
        cache_path = _as_str(cache_data.get("path"))
        caches.path = root / cache_path if cache_path else None

    parser_data = _as_dict(data.get("parser"))
    parser = ParserConfig()
    if parser_data:
        include = _as_bool(parser_data.get("include_folder_path_in_structure"))
        parser.include_folder_path_in_structure = bool(include)
        format_name = _as_str(parser_data.get("format"))
        if format_name:
            try:
                parser.format = ExportFormat(format_name)
            except ValueError as exc:
                raise ConfigError(
                    f"Unknown parser.format {format_name!r}; expected 'normal' or 'lang.js'"
                ) from exc

    export_data = _as_dict(data.get("export"))
    export = ExportConfig()
    if export_data:
        filepath = _as_str(export_data.get("filepath"))
        export.filepath = root / filepath if filepath else None
        export.variable = _as_str(export_data.get("variable")) or export.variable
        export.flat = _as_bool(export_data.get("flat")) or False

    return LocalizationConfig(
        root=root,
        lang_path=root / lang_path_str if lang_path_str else None,
        definition_suffixes=suffixes,
        caches=caches,
        parser=parser,
        export=export,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CacheConfig",
    "ExportConfig",
    "LocalizationConfig",
    "ParserConfig",
    "load_config",
]
