"""An in-memory event log, grouped by aggregate type and ID."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from typing import Any

from ..event import Event
from ..event_log import EventLog as BaseEventLog
from ..service_bus import HandlerFunc, MiddlewareFunc


class EventLog(BaseEventLog):
    """Stores events in memory; its middleware ends the handler chain."""

    def __init__(self) -> None:
        self._events: dict[str, dict[str, list[Event]]] = defaultdict(lambda: defaultdict(list))

    def events_of(self, aggregate_id: str, aggregate_type: str) -> list[Event]:
        by_id = self._events.get(aggregate_type)
        if by_id is None:
            return []
        return list(by_id.get(aggregate_id, ()))

    def middleware(self) -> MiddlewareFunc:
        """Middleware that appends each event and does not call the next handler."""

        def wrap(next_handler: HandlerFunc) -> HandlerFunc:
            def handle(msg: Any, ctx: Mapping[str, Any]) -> bool:
                if not isinstance(msg, Event):
                    raise TypeError("payload is not an Event")
                self.append(msg)
                return True

            return handle

        return wrap

    def append(self, event: Event) -> None:
        self._events[event.aggregate_type][str(event.aggregate_id)].append(event)