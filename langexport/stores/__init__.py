"""Cache stores for merged localization documents."""

from __future__ import annotations

from pathlib import Path

from ..errors import ConfigError
from .base import CacheStore
from .file import FileCacheStore
from .gate import CacheGate
from .memory import MemoryCacheStore

_MEMORY_DRIVERS = {"array", "memory"}


def create_store(driver: str, path: Path) -> CacheStore:
    """Build the store named by ``driver``; ``path`` is used by the file driver."""
    name = driver.strip().lower()
    if name == "file":
        return FileCacheStore(path)
    if name in _MEMORY_DRIVERS:
        return MemoryCacheStore()
    raise ConfigError(f"Unknown cache driver: {driver}")


__all__ = [
    "CacheGate",
    "CacheStore",
    "FileCacheStore",
    "MemoryCacheStore",
    "create_store",
]
