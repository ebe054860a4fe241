"""Read-only projections updated by domain events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .event import Event, event_type


class View(ABC):
    """A projection mutated only by the events it subscribes to."""

    def __init__(self, *args: Any) -> None:
        self._subscribed_to = [event_type(event) for event in args]

    @property
    def subscribed_to(self) -> list[str]:
        return list(self._subscribed_to)

    @abstractmethod
    def mutate_when(self, event: Event) -> None:
        """Apply ``event`` to the projection."""