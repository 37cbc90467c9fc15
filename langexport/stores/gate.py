"""Serve merged documents from a cache store when possible."""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict

from ..errors import CacheError, LocalizationError
from ..events import EventSink, ExportCompletedEvent, NullEventSink
from ..logging import get_logger
from .base import CacheStore

Document = Dict[str, Any]

_MISS = object()


class CacheGate:
    """Returns a cached document or computes, announces and stores a fresh one."""

    def __init__(self, store: CacheStore, events: EventSink | None = None) -> None:
        self.store = store
        self.events = events or NullEventSink()
        self.logger = get_logger("cache")
        self.last_hit = False

    def get_or_compute(
        self, key: str, ttl: int, compute: Callable[[], Document]
    ) -> Document:
        """Return the document cached under ``key`` or compute it.

        The store is read once, so an entry expiring during the lookup is a
        miss rather than an error. A fresh document triggers exactly one
        :class:`ExportCompletedEvent` and is written back only when ``ttl`` is
        positive.
        """
        cached = self._call(self.store.get, key, _MISS)
        if cached is not _MISS:
            self.logger.debug("Cache hit for %s", key)
            self.last_hit = True
            return cached

        self.logger.debug("Cache miss for %s", key)
        self.last_hit = False
        document = compute()
        self.announce(document)

        if ttl > 0:
            self._call(self.store.put, key, document, ttl)
            self.logger.debug("Stored %s for %d seconds", key, ttl)
        return document

    def announce(self, document: Document) -> None:
        """Emit the completion event with a copy handlers are free to mutate."""
        self.events.emit(ExportCompletedEvent(document=copy.deepcopy(document)))

    @staticmethod
    def _call(operation: Callable[..., Any], *args: Any) -> Any:
        try:
            return operation(*args)
        except LocalizationError:
            raise
        except Exception as exc:
            raise CacheError(f"Cache store failed: {exc}") from exc


__all__ = ["CacheGate"]
