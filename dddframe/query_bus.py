"""Routes queries to the query service subscribed to them."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import raise_collected
from .query import Query, QueryResponse
from .service_bus import HandlerFunc, MiddlewareFunc, ServiceBus


def _handler_for(service: Any) -> HandlerFunc:
    def handle(msg: Any, ctx: Mapping[str, Any]) -> Any:
        return service.executor(msg, ctx)

    return handle


class QueryBus:
    """Dispatches each query to the single service registered for its type."""

    def __init__(self, service_bus: Any = None) -> None:
        self._service_bus = ServiceBus() if service_bus is None else service_bus

    def register_service(self, service: Any) -> None:
        """Register ``service`` for every query type it subscribes to."""
        errors: list[Exception] = []
        for query_type in service.subscribed_to:
            try:
                self._service_bus.register(query_type, _handler_for(service))
            except Exception as error:  # noqa: BLE001 - collected and re-raised
                errors.append(error)
        raise_collected(errors)

    def dispatch(self, query: Query, ctx: Mapping[str, Any] | None = None) -> QueryResponse:
        result = self._service_bus.dispatch(query, ctx)
        if not isinstance(result, QueryResponse):
            raise TypeError("QueryBus.Dispatch() expects a QueryResponse")
        return result

    def use(self, middleware: MiddlewareFunc) -> None:
        self._service_bus.use(middleware)