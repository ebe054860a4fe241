"""Policies: when this event happens, issue that command."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .command import Command
from .event import Event, event_type


class Policy(ABC):
    """Reacts to subscribed events by returning a command, or ``None``."""

    def __init__(self, *args: Any) -> None:
        self._subscribed_to = [event_type(event) for event in args]

    @property
    def subscribed_to(self) -> list[str]:
        return list(self._subscribed_to)

    @abstractmethod
    def when(self, event: Event) -> Command | None:
        """Return the command to issue for ``event``."""