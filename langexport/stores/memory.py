"""Process-local cache store."""

from __future__ import annotations

import copy
import time
from typing import Any, Callable, Dict, Optional, Tuple

from ..errors import CacheError
from .base import MISSING


class MemoryCacheStore:
    """Keeps entries in a dict; values are deep-copied on the way in and out."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}

    def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def get(self, key: str, default: Any = MISSING) -> Any:
        entry = self._live_entry(key)
        if entry is None:
            if default is MISSING:
                raise CacheError(f"Cache entry {key!r} is missing or expired")
            return default
        value, _ = entry
        return copy.deepcopy(value)

    def put(self, key: str, value: Any, ttl: Optional[int]) -> None:
        expires_at = self._clock() + ttl if ttl is not None else None
        self._entries[key] = (copy.deepcopy(value), expires_at)

    def forget(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def _live_entry(self, key: str) -> Optional[Tuple[Any, Optional[float]]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry


__all__ = ["MemoryCacheStore"]
