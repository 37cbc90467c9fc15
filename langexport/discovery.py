"""Definition file discovery under the language root."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Sequence

from .errors import DirectoryNotFoundError, PermissionDeniedError
from .logging import get_logger
from .models import Classification, DefinitionFile

DEFAULT_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")

VENDOR_SEGMENT = "vendor"

_logger = get_logger("discovery")


@dataclass
class DiscoveryResult:
    """Definition files split by origin, each list sorted by relative path."""

    application: List[DefinitionFile] = field(default_factory=list)
    vendor: List[DefinitionFile] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.application) + len(self.vendor)


def _raise_walk_error(exc: OSError) -> None:
    if isinstance(exc, PermissionError):
        raise PermissionDeniedError(f"Cannot read {exc.filename}: {exc.strerror}") from exc
    raise exc


def _iter_files(root: Path) -> Iterator[Path]:
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        current_dir = Path(dirpath)
        for filename in filenames:
            yield current_dir / filename


def classify(parts: Sequence[str]) -> Classification:
    """Return VENDOR when any directory segment is exactly ``vendor``."""
    if VENDOR_SEGMENT in parts[:-1]:
        return Classification.VENDOR
    return Classification.APPLICATION


def _normalise_suffix(suffix: str) -> str:
    suffix = suffix.lower()
    return suffix if suffix.startswith(".") else f".{suffix}"


class FileDiscovery:
    """Walks the language root and collects translation definition files."""

    def __init__(self, suffixes: Sequence[str] = DEFAULT_SUFFIXES) -> None:
        self.suffixes = tuple(_normalise_suffix(suffix) for suffix in suffixes if suffix)

    def matches(self, filename: str) -> bool:
        return filename.lower().endswith(self.suffixes)

    def discover(self, root: str | Path) -> DiscoveryResult:
        """Return application and vendor definition files below ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise DirectoryNotFoundError(f"Language path not found: {root}")
        if not root_path.is_dir():
            raise DirectoryNotFoundError(f"Language path is not a directory: {root}")

        result = DiscoveryResult()
        for path in _iter_files(root_path):
            if not self.matches(path.name):
                continue
            parts = path.relative_to(root_path).parts
            definition = DefinitionFile(
                path=path,
                parts=parts,
                classification=classify(parts),
            )
            if definition.is_vendor:
                result.vendor.append(definition)
            else:
                result.application.append(definition)

        # os.walk order depends on the filesystem; sort so last-writer-wins is reproducible.
        result.application.sort(key=lambda item: item.parts)
        result.vendor.sort(key=lambda item: item.parts)

        _logger.debug(
            "Discovered %d application and %d vendor files under %s",
            len(result.application),
            len(result.vendor),
            root_path,
        )
        return result


__all__ = ["DEFAULT_SUFFIXES", "DiscoveryResult", "FileDiscovery", "classify"]
