"""Merged localization document returned by an export."""

from __future__ import annotations

import copy
import json
from types import MappingProxyType
from typing import Any, Dict, Mapping


class LocalizationExport:
    """Holds the merged document and its alternative shapes."""

    def __init__(self, document: Dict[str, Any], *, from_cache: bool = False) -> None:
        self._document = document
        self.from_cache = from_cache

    def as_nested(self) -> Mapping[str, Any]:
        """Read-only mapping of ``language -> namespace -> translations``.

        The mapping wraps a private copy, so changes made to the nested
        dictionaries it hands out never reach this export.
        """
        return MappingProxyType(copy.deepcopy(self._document))

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._document)

    def as_flat(self, separator: str = ".") -> Dict[str, Any]:
        """Collapse the first two levels into ``"<lang><separator><namespace>"`` keys.

        Only the language and namespace levels are joined; everything below a
        namespace is returned as-is.
        """
        results: Dict[str, Any] = {}
        for language, namespaces in self._document.items():
            if not isinstance(namespaces, Mapping):
                continue
            for namespace, messages in namespaces.items():
                results[f"{language}{separator}{namespace}"] = copy.deepcopy(messages)
        return results

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self._document, indent=indent, ensure_ascii=False)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LocalizationExport):
            return self._document == other._document
        return NotImplemented

    def __repr__(self) -> str:
        return f"LocalizationExport(languages={list(self._document)!r}, from_cache={self.from_cache})"


__all__ = ["LocalizationExport"]
