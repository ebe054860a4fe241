"""Application services that execute commands."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .command import Command, command_type

CommandExecutor = Callable[[Command, Mapping[str, Any]], None]


class CommandService:
    """Executes the command types it subscribes to and publishes resulting events."""

    def __init__(self, executor: CommandExecutor, *args: Any) -> None:
        self._subscribed_to = [command_type(command) for command in args]
        self._executor = executor
        self._event_bus: Any = None

    @property
    def subscribed_to(self) -> list[str]:
        return list(self._subscribed_to)

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    def with_event_bus(self, bus: Any) -> CommandService:
        self._event_bus = bus
        return self

    def dispatch_from(self, producer: Any, ctx: Mapping[str, Any] | None = None) -> None:
        """Dispatch every pending event of ``producer`` on the event bus."""
        if self._event_bus is None:
            raise RuntimeError("EventBus not set")
        self._event_bus.dispatch_from(producer, ctx)