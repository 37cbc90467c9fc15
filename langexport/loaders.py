"""Readers for translation definition files."""

from __future__ import annotations

from datetime import date, datetime
import json
from pathlib import Path
from typing import Any, Callable, Dict

import yaml

from .errors import FileLoadError, PermissionDeniedError

DefinitionLoader = Callable[[Path], Dict[str, Any]]


_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _DefinitionYamlLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted dates as strings."""


_DefinitionYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _parse_json(text: str) -> Any:
    return json.loads(text)


def _parse_yaml(text: str) -> Any:
    return yaml.load(text, Loader=_DefinitionYamlLoader)


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool) or key is None:
        return json.dumps(key)
    return str(key)


def _json_safe(value: Any) -> Any:
    """Return ``value`` with string keys and only JSON-representable scalars."""
    if isinstance(value, dict):
        return {_json_key(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return [_json_safe(item) for item in sorted(value, key=str)]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".json": _parse_json,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
}


def load_definition(path: Path) -> Dict[str, Any]:
    """Return the translation mapping stored in ``path``.

    Empty files load as an empty mapping. Anything that is not a mapping at the
    top level is rejected. Keys become strings and values are limited to JSON
    types so a document reads back identically from a JSON cache.
    """
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise FileLoadError(f"No loader registered for {path.name}")

    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError as exc:
        raise PermissionDeniedError(f"Cannot read {path}: {exc.strerror}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise FileLoadError(f"Failed to read {path}: {exc}") from exc

    if not text.strip():
        return {}

    try:
        data = parser(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise FileLoadError(f"Failed to parse {path.name}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FileLoadError(f"{path.name} must contain a mapping at the root")
    return _json_safe(data)


__all__ = ["DefinitionLoader", "load_definition"]
