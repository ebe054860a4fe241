"""Interfaces that infrastructure adapters implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .entity_id import ID
from .event import Event
from .service_bus import MiddlewareFunc

T = TypeVar("T")

PUBLISH_EVENT = "publishEvent"
"""Context key; when set to ``False`` event publishers skip publishing."""

MessageTranslator = Callable[[bytes], Event]
"""Turns a raw incoming message into a domain event."""


class EventPublisher(ABC):
    """Publishes domain events to other contexts."""

    @abstractmethod
    def publish(self, event: Event) -> None:
        """Publish ``event``."""

    @property
    @abstractmethod
    def queue(self) -> Any:
        """What consumers need to receive the published events."""

    @abstractmethod
    def middleware(self) -> MiddlewareFunc:
        """Return middleware that publishes every event passing through a bus."""

    @abstractmethod
    def close(self) -> None:
        """Release the publisher's resources."""


class Repository(ABC, Generic[T]):
    """Persistence of aggregates of one type."""

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """Persist an aggregate."""

    @abstractmethod
    def load(self, id: ID) -> T:
        """Return the aggregate with the given ID."""

    @abstractmethod
    def load_all(self) -> list[T]:
        """Return every stored aggregate."""

    @abstractmethod
    def delete(self, id: ID) -> None:
        """Remove the aggregate with the given ID."""

    @abstractmethod
    def update(self, aggregate: T) -> None:
        """Persist the changes made to an aggregate."""