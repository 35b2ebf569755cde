"""In-memory event bus implementation."""

from __future__ import annotations

from typing import Any, Dict, List, Type

import structlog

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class UnknownEventType(LookupError):
    """An outbox row names an event class no handler was subscribed for."""


class InMemoryEventBus(IEventBus):
    """Simple in-process event bus.

    Event classes are registered by name on ``subscribe`` so rows read
    back from the outbox can be turned into typed events again.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}
        self._event_types: Dict[str, Type[DomainEvent]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        self._event_types[event_class.__name__] = event_class
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, event: DomainEvent) -> None:
        for handler in self._handlers.get(type(event), []):
            handler.handle(event)

    def publish_payload(self, event_name: str, payload: Dict[str, Any]) -> None:
        event_class = self._event_types.get(event_name)
        if event_class is None:
            raise UnknownEventType(f"No subscribers registered for {event_name}.")
        self.publish(event_class.from_payload(payload))


# Global bus instance (singleton)

event_bus = InMemoryEventBus()
