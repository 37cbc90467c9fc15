"""Key-value cache store contract."""

from __future__ import annotations

from typing import Any, Optional, Protocol

# Passed as ``default`` to make ``get`` raise on a miss.
MISSING: Any = object()


class CacheStore(Protocol):
    """Minimal store used to keep merged documents between exports.

    ``get`` returns ``default`` for a missing or expired entry, or raises
    :class:`~langexport.errors.CacheError` when no default is given. Expiry is
    checked once per call, so a single ``get`` never races an expiry between
    two lookups.
    """

    def has(self, key: str) -> bool: ...

    def get(self, key: str, default: Any = MISSING) -> Any: ...

    def put(self, key: str, value: Any, ttl: Optional[int]) -> None: ...

    def forget(self, key: str) -> bool: ...


__all__ = ["MISSING", "CacheStore"]
