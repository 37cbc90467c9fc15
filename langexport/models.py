"""Core data models shared across langexport components."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple


class Classification(str, Enum):
    """Origin of a definition file."""

    APPLICATION = "application"
    VENDOR = "vendor"


class ExportFormat(str, Enum):
    """Shape of the merged document."""

    NORMAL = "normal"
    LANG_JS = "lang.js"


@dataclass(frozen=True)
class DefinitionFile:
    """A translation definition file found under the language root."""

    path: Path
    parts: Tuple[str, ...]
    classification: Classification

    @property
    def relative_path(self) -> str:
        return "/".join(self.parts)

    @property
    def is_vendor(self) -> bool:
        return self.classification is Classification.VENDOR


@dataclass(frozen=True)
class KeyPath:
    """Location inside the merged document where a file's contents land."""

    keys: Tuple[str, ...]
    leaf: str
