"""Collects events raised by an aggregate until they are dispatched."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any

from .entity_id import ID
from .event import Event, event_type


class EventProducer:
    """Thread-safe buffer of pending domain events."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[Event] = []

    def register_event(self, aggregate_type: str, aggregate_id: ID, payload: Any) -> EventProducer:
        """Record a new event for ``payload`` and return this producer."""
        event = Event(
            aggregate_type=aggregate_type,
            aggregate_id=aggregate_id,
            event_type=event_type(payload),
            time_stamp=datetime.now().astimezone(),
            payload=payload,
        )
        with self._lock:
            self._events.append(event)
        return self

    def events(self) -> list[Event]:
        """Return all pending events and clear the buffer."""
        with self._lock:
            pending, self._events = self._events, []
        return pending

    def get_first(self) -> Event:
        """Remove and return the oldest pending event."""
        with self._lock:
            if not self._events:
                raise IndexError("no pending events")
            return self._events.pop(0)

    def clear_events(self) -> None:
        with self._lock:
            self._events = []