"""JSON file backed cache store."""

from __future__ import annotations

from datetime import UTC, datetime
import json
import os
from pathlib import Path
import tempfile
import threading
import time
from typing import Any, Callable, Dict, Optional

from ..errors import CacheError
from .base import MISSING

_CACHE_VERSION = 1


class FileCacheStore:
    """Persists entries to a single JSON file with per-entry expiry.

    The file is re-read on every access so that separate processes sharing the
    path observe each other's writes. Writes go to a temporary sibling that is
    renamed over the cache file, so readers never see a partial payload.
    """

    def __init__(self, path: Path, clock: Callable[[], float] = time.time) -> None:
        self._path = path
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def has(self, key: str) -> bool:
        return self._live_entry(self._load(), key) is not None

    def get(self, key: str, default: Any = MISSING) -> Any:
        entry = self._live_entry(self._load(), key)
        if entry is None:
            if default is MISSING:
                raise CacheError(f"Cache entry {key!r} is missing or expired")
            return default
        return entry["value"]

    def put(self, key: str, value: Any, ttl: Optional[int]) -> None:
        with self._lock:
            entries = self._load()
            now = self._clock()
            entries[key] = {
                "value": value,
                "expires_at": now + ttl if ttl is not None else None,
                "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            }
            self._persist(entries)

    def forget(self, key: str) -> bool:
        with self._lock:
            entries = self._load()
            if key not in entries:
                return False
            del entries[key]
            self._persist(entries)
            return True

    def clear(self) -> None:
        with self._lock:
            self._persist({})

    # ------------------------------------------------------------------
    # Internal helpers

    def _live_entry(self, entries: Dict[str, Dict[str, Any]], key: str) -> Optional[Dict[str, Any]]:
        entry = entries.get(key)
        if entry is None:
            return None
        expires_at = entry.get("expires_at")
        if isinstance(expires_at, (int, float)) and expires_at <= self._clock():
            return None
        return entry

    def _load(self) -> Dict[str, Dict[str, Any]]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            raise CacheError(f"Failed to read cache file {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CacheError(f"Cache file {self._path} is malformed")
        # Entries written by another layout version are not reusable.
        if data.get("version") != _CACHE_VERSION:
            return {}
        entries = data.get("entries")
        if not isinstance(entries, dict):
            raise CacheError(f"Cache file {self._path} is malformed")
        return {
            key: raw
            for key, raw in entries.items()
            if isinstance(key, str) and isinstance(raw, dict) and "value" in raw
        }

    def _persist(self, entries: Dict[str, Dict[str, Any]]) -> None:
        payload = {
            "version": _CACHE_VERSION,
            "entries": entries,
        }
        try:
            content = json.dumps(payload, indent=2, sort_keys=True)
        except (TypeError, ValueError) as exc:
            raise CacheError(f"Cache value is not JSON serialisable: {exc}") from exc

        tmp_name: Optional[str] = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            raise CacheError(f"Failed to write cache file {self._path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass


__all__ = ["FileCacheStore"]
