"""In-process event sink for export notifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Protocol

from .logging import get_logger

_logger = get_logger("events")


@dataclass(frozen=True)
class ExportCompletedEvent:
    """Fired once after a document was freshly merged (never on cache hits)."""

    document: Dict[str, Any]


class EventSink(Protocol):
    def emit(self, event: ExportCompletedEvent) -> None: ...


EventHandler = Callable[[ExportCompletedEvent], Any]


class EventDispatcher:
    """Calls registered handlers synchronously in registration order.

    Handler exceptions propagate to the caller of :meth:`emit`.
    """

    def __init__(self) -> None:
        self._handlers: List[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> EventHandler:
        """Register ``handler``; usable as a decorator."""
        self._handlers.append(handler)
        _logger.debug(
            "Registered export handler %s (%d total)",
            getattr(handler, "__name__", "unknown"),
            len(self._handlers),
        )
        return handler

    def emit(self, event: ExportCompletedEvent) -> None:
        _logger.debug("Dispatching export event to %d handlers", len(self._handlers))
        for handler in self._handlers:
            handler(event)


class NullEventSink:
    """Sink used when nobody listens for export events."""

    def emit(self, event: ExportCompletedEvent) -> None:
        return None


__all__ = [
    "EventDispatcher",
    "EventHandler",
    "EventSink",
    "ExportCompletedEvent",
    "NullEventSink",
]
