"""Routes commands to the command service subscribed to them."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .command import Command
from .errors import raise_collected
from .service_bus import HandlerFunc, MiddlewareFunc, ServiceBus


def _handler_for(service: Any) -> HandlerFunc:
    def handle(msg: Any, ctx: Mapping[str, Any]) -> bool:
        service.executor(msg, ctx)
        return True

    return handle


class CommandBus:
    """Dispatches each command to the single service registered for its type."""

    def __init__(self, service_bus: Any = None) -> None:
        self._service_bus = ServiceBus() if service_bus is None else service_bus

    def register_service(self, service: Any) -> None:
        """Register ``service`` for every command type it subscribes to."""
        errors: list[Exception] = []
        for command_type in service.subscribed_to:
            try:
                self._service_bus.register(command_type, _handler_for(service))
            except Exception as error:  # noqa: BLE001 - collected and re-raised
                errors.append(error)
        raise_collected(errors)

    def dispatch(self, command: Command, ctx: Mapping[str, Any] | None = None) -> None:
        self._service_bus.dispatch(command, ctx)

    def use(self, middleware: MiddlewareFunc) -> None:
        self._service_bus.use(middleware)