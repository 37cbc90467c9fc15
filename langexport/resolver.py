"""Maps definition file paths to their location in the merged document."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Sequence, Tuple

from .discovery import VENDOR_SEGMENT
from .errors import InvalidPathError
from .models import DefinitionFile, ExportFormat, KeyPath

# Offset of the language segment inside the relative path parts:
#   <lang>/<folder>.../<file>
#   vendor/<package>/<lang>/<folder>.../<file>
APPLICATION_OFFSET = 0
VENDOR_OFFSET = 2


def _stem(filename: str) -> str:
    return PurePosixPath(filename).stem


def _strip_vendor_prefix(parts: Sequence[str]) -> Tuple[str, ...]:
    """Return ``parts`` without the ``vendor/<package>`` directories.

    Packages normally live at ``vendor/<package>/<lang>/...``. The
    ``<lang>/vendor/<package>/...`` layout is accepted too, with the language
    kept in front so both shapes resolve to the same keys.
    """
    relative = "/".join(parts)
    index = list(parts[:-1]).index(VENDOR_SEGMENT)
    if index + 1 >= len(parts) - 1:
        raise InvalidPathError(f"Vendor file {relative!r} has no package directory")

    if index == 0:
        return tuple(parts[VENDOR_OFFSET:])
    if index == 1:
        return (parts[0],) + tuple(parts[index + 2 :])
    raise InvalidPathError(
        f"Vendor file {relative!r} must live under vendor/<package>/<lang>/"
    )


class KeyPathResolver:
    """Computes the key path and leaf name for each definition file."""

    def __init__(
        self,
        *,
        include_folder_path: bool = False,
        format: ExportFormat = ExportFormat.NORMAL,
    ) -> None:
        self.include_folder_path = include_folder_path
        self.format = ExportFormat(format)

    def resolve(self, definition: DefinitionFile) -> KeyPath:
        parts = definition.parts
        if definition.is_vendor:
            segments = _strip_vendor_prefix(parts)
        else:
            segments = tuple(parts[APPLICATION_OFFSET:])

        if len(segments) < 2:
            raise InvalidPathError(
                f"Definition file {definition.relative_path!r} is not inside a language directory"
            )

        language = segments[0]
        stem = _stem(segments[-1])
        if self.include_folder_path:
            keys = tuple(segments[:-1])
        else:
            keys = (language,)

        if self.format is ExportFormat.LANG_JS:
            return KeyPath(keys=keys, leaf=".".join(keys + (stem,)))
        return KeyPath(keys=keys, leaf=stem)


__all__ = ["APPLICATION_OFFSET", "VENDOR_OFFSET", "KeyPathResolver"]
