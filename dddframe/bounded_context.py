"""A bounded context wiring buses, endpoints and message consumers together."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .command_bus import CommandBus
from .event_bus import EventBus
from .inmemory.event_publisher import EventPublisher
from .policy import Policy
from .query_bus import QueryBus
from .view import View
from .web.command_endpoint import CommandEndpoint
from .web.query_endpoint import QueryEndpoint

_DEFAULT_NAME = "default"


@dataclass(frozen=True)
class ContextConfiguration:
    name: str = ""


class BoundedContext:
    """Owns a context's query, command and event buses and what is attached to them.

    Registration methods return the context so calls can be chained.
    """

    def __init__(self, config: ContextConfiguration | None = None) -> None:
        self._query_bus = QueryBus()
        self._command_bus = CommandBus()
        self._event_bus = EventBus(self._command_bus)
        self.message_consumers: dict[str, Any] = {}
        self.query_endpoints: dict[str, QueryEndpoint] = {}
        self.command_endpoints: dict[str, CommandEndpoint] = {}
        if config is None:
            config = ContextConfiguration(name=_DEFAULT_NAME)
        elif not isinstance(config, ContextConfiguration):
            raise TypeError("Invalid config")
        self.name = config.name or _DEFAULT_NAME
        self.event_publisher = EventPublisher()

    @property
    def query_bus(self) -> QueryBus:
        return self._query_bus

    @property
    def command_bus(self) -> CommandBus:
        return self._command_bus

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def register_policy(self, policy: Policy) -> BoundedContext:
        self._event_bus.register_policy(policy)
        return self

    def register_view(self, view: View) -> BoundedContext:
        self._event_bus.register_view(view)
        return self

    def register_query_service(self, service: Any) -> BoundedContext:
        self._query_bus.register_service(service)
        return self

    def register_query_endpoint(self, endpoint: QueryEndpoint) -> BoundedContext:
        self._check_endpoint(endpoint, self.query_endpoints)
        endpoint.register_query_bus(self._query_bus)
        self.query_endpoints[endpoint.path] = endpoint
        return self

    def register_command_service(self, service: Any) -> BoundedContext:
        self._command_bus.register_service(service.with_event_bus(self._event_bus))
        return self

    def register_command_endpoint(self, endpoint: CommandEndpoint) -> BoundedContext:
        self._check_endpoint(endpoint, self.command_endpoints)
        endpoint.register_command_bus(self._command_bus)
        self.command_endpoints[endpoint.path] = endpoint
        return self

    def register_message_consumer(self, consumer: Any) -> BoundedContext:
        """Attach ``consumer`` unless one is already registered for its target."""
        if consumer.target not in self.message_consumers:
            consumer.set_event_bus(self._event_bus)
            self.message_consumers[consumer.target] = consumer
        return self

    def start(self) -> None:
        """Start the context; its message consumers are started by the application server."""

    @staticmethod
    def _check_endpoint(endpoint: Any, registered: dict[str, Any]) -> None:
        if endpoint.path in registered:
            raise ValueError(f"Endpoint {endpoint.path} already registered")
        if endpoint.methods is None:
            raise ValueError(f"Endpoint {endpoint.path} has no methods")