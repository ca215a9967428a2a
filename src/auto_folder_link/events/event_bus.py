"""
Event Bus - Event-driven communication system.

Vault events (a note was created, a note was moved) flow through the bus so
that the watcher, the plugin and any observers stay decoupled.
"""

import asyncio
import inspect
import logging
import uuid
import weakref
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T', bound='VaultEvent')


@dataclass
class VaultEvent:
    """Base class for all vault events."""
    event_id: str = field(default_factory=lambda: f"evt_{uuid.uuid4().hex}")
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.__class__.__name__,
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
            "data": self._get_event_data(),
        }

    def _get_event_data(self) -> Dict[str, Any]:
        return {}


class EventBus:
    """
    Publish/subscribe hub for vault events.

    Handlers may be plain functions or coroutines; a handler that raises is
    logged and does not prevent the others from running.
    """

    def __init__(self, max_events_in_memory: int = 1000):
        self._handlers: Dict[Type[VaultEvent], List[weakref.ref]] = {}
        self._event_store: List[VaultEvent] = []
        self._max_events_in_memory = max_events_in_memory

    def subscribe(self, event_type: Type[T], handler: Callable[[T], Any]) -> None:
        """
        Subscribe to events of a specific type.

        Handlers are held by weak reference; the subscriber must keep them
        alive.
        """
        if inspect.ismethod(handler):
            ref = weakref.WeakMethod(handler)
        else:
            ref = weakref.ref(handler)
        self._handlers.setdefault(event_type, []).append(ref)

    def unsubscribe(self, event_type: Type[VaultEvent], handler: Callable) -> None:
        if event_type in self._handlers:
            self._handlers[event_type] = [
                ref for ref in self._handlers[event_type]
                if ref() is not None and ref() != handler
            ]

    def handlers_for(self, event_type: Type[VaultEvent]) -> List[Callable]:
        """Live handlers for *event_type* and its parent event types."""
        handlers = []
        for klass in event_type.__mro__:
            if isinstance(klass, type) and issubclass(klass, VaultEvent) and klass in self._handlers:
                handlers.extend(ref() for ref in self._handlers[klass] if ref() is not None)
        return handlers

    async def publish(self, event: VaultEvent) -> None:
        """Publish an event and wait for every handler to finish."""
        self._event_store.append(event)
        if len(self._event_store) > self._max_events_in_memory:
            self._event_store.pop(0)

        handlers = self.handlers_for(type(event))
        if handlers:
            await asyncio.gather(*(self._safe_handle(h, event) for h in handlers))

    async def _safe_handle(self, handler: Callable, event: VaultEvent) -> None:
        try:
            result = handler(event)
            if asyncio.iscoroutine(result):
                await result
        except Exception:
            logger.exception(f"Error in event handler {handler} for {type(event).__name__}")

    def get_events(self, event_type: Optional[Type[VaultEvent]] = None,
                   since: Optional[datetime] = None) -> List[VaultEvent]:
        """Get published events with optional filtering."""
        events = self._event_store
        if event_type:
            events = [e for e in events if isinstance(e, event_type)]
        if since:
            events = [e for e in events if e.timestamp >= since]
        return list(events)

    def clear(self) -> None:
        """Clear all handlers and events."""
        self._handlers.clear()
        self._event_store.clear()
