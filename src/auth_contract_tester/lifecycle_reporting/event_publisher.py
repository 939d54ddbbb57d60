"""Typed lifecycle event dispatch."""

from __future__ import annotations

import threading
from collections import defaultdict
from collections.abc import Callable
from typing import Any, TypeVar

EventT = TypeVar("EventT")
EventHandler = Callable[[EventT], None]


class EventPublisher:
    """Maps event types to handler callables and delivers events to them.

    Handlers run synchronously on the publishing thread, in registration
    order. Delivery is by exact event type.
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[type, list[Callable[[Any], None]]] = defaultdict(list)
        self._lock = threading.Lock()

    def register_handler_for(self, event_type: type[EventT], handler: EventHandler[EventT]) -> None:
        with self._lock:
            self._handlers[event_type].append(handler)

    def handlers_for(self, event_type: type) -> tuple[Callable[[Any], None], ...]:
        with self._lock:
            return tuple(self._handlers.get(event_type, ()))

    def publish(self, event: object) -> None:
        for handler in self.handlers_for(type(event)):
            handler(event)
