"""Merge strategies that fold definition file contents into one document."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Sequence

from .errors import MergeConflictError
from .models import ExportFormat, KeyPath

Document = Dict[str, Any]


def ensure_path(document: Document, keys: Sequence[str]) -> Document:
    """Return the mapping at ``keys``, creating empty mappings along the way."""
    current = document
    for index, key in enumerate(keys):
        if key not in current:
            current[key] = {}
        child = current[key]
        if not isinstance(child, dict):
            location = ".".join(keys[: index + 1])
            raise MergeConflictError(
                f"Cannot nest translations under {location!r}: it already holds a value"
            )
        current = child
    return current


def merge_into(
    document: Document, keys: Sequence[str], leaf: str, contents: Mapping[str, Any]
) -> None:
    """Place ``contents`` at ``keys``/``leaf``.

    When ``leaf`` is already present the incoming keys overwrite existing keys
    of the same name one level deep; other existing keys are kept.
    """
    target = ensure_path(document, keys)
    if leaf not in target:
        target[leaf] = dict(contents)
        return
    existing = target[leaf]
    if not isinstance(existing, dict):
        location = ".".join([*keys, leaf])
        raise MergeConflictError(f"Cannot merge translations into {location!r}")
    for key, value in contents.items():
        existing[key] = value


class MergeStrategy(ABC):
    """Decides where in the document a resolved file is merged."""

    format: ExportFormat

    @abstractmethod
    def merge(self, document: Document, key_path: KeyPath, contents: Mapping[str, Any]) -> None:
        """Merge ``contents`` into ``document`` for the given key path."""


class HierarchicalMergeStrategy(MergeStrategy):
    """Nests contents as ``document[lang][...folders][namespace]``."""

    format = ExportFormat.NORMAL

    def merge(self, document: Document, key_path: KeyPath, contents: Mapping[str, Any]) -> None:
        merge_into(document, key_path.keys, key_path.leaf, contents)


class FlatMergeStrategy(MergeStrategy):
    """Stores contents at the document root under a dotted Lang.js key."""

    format = ExportFormat.LANG_JS

    def merge(self, document: Document, key_path: KeyPath, contents: Mapping[str, Any]) -> None:
        merge_into(document, (), key_path.leaf, contents)


_STRATEGIES = {
    ExportFormat.NORMAL: HierarchicalMergeStrategy,
    ExportFormat.LANG_JS: FlatMergeStrategy,
}


def strategy_for(format: ExportFormat | str) -> MergeStrategy:
    return _STRATEGIES[ExportFormat(format)]()


__all__ = [
    "Document",
    "FlatMergeStrategy",
    "HierarchicalMergeStrategy",
    "MergeStrategy",
    "ensure_path",
    "merge_into",
    "strategy_for",
]
