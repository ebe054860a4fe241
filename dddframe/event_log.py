"""Logs of the events dispatched for each aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Mapping
from typing import Any

from .event import Event
from .service_bus import HandlerFunc, MiddlewareFunc


class EventLog(ABC):
    """Records events and returns those of one aggregate."""

    @abstractmethod
    def events_of(self, aggregate_id: str, aggregate_type: str) -> list[Event]:
        """Return the events logged for the given aggregate, oldest first."""

    @abstractmethod
    def middleware(self) -> MiddlewareFunc:
        """Return middleware that logs every event passing through a bus."""


class InMemoryEventLog(EventLog):
    """An event log kept in memory, mainly for tests."""

    def __init__(self) -> None:
        self._events: dict[str, list[Event]] = defaultdict(list)

    def events_of(self, aggregate_id: str, aggregate_type: str) -> list[Event]:
        return list(self._events.get(f"{aggregate_type}:{aggregate_id}", ()))

    def middleware(self) -> MiddlewareFunc:
        def wrap(next_handler: HandlerFunc) -> HandlerFunc:
            def handle(msg: Any, ctx: Mapping[str, Any]) -> Any:
                if not isinstance(msg, Event):
                    raise TypeError("payload is not an Event")
                self._events[f"{msg.aggregate_type}:{msg.aggregate_id}"].append(msg)
                return next_handler(msg, ctx)

            return handle

        return wrap