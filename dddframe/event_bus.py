"""Delivers domain events to views and policies."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from typing import Any

from .errors import raise_collected
from .event import Event
from .service_bus import MiddlewareFunc, ServiceBus
from .view import View
from .policy import Policy


class EventBus:
    """Dispatches events to subscribed views, and policy commands to a command bus."""

    def __init__(self, command_bus: Any) -> None:
        self._service_bus = ServiceBus()
        self._command_bus = command_bus
        self._views: dict[str, list[View]] = defaultdict(list)
        self._policies: dict[str, list[Policy]] = defaultdict(list)

    def handle(self, msg: Any, ctx: Mapping[str, Any] | None = None) -> bool:
        """Deliver ``msg`` to every view and policy subscribed to its type."""
        if not isinstance(msg, Event):
            raise TypeError("eventBus.Handler() expects an Event")
        errors: list[Exception] = []
        for deliver in (self._dispatch_to_views, self._dispatch_to_policies):
            try:
                deliver(msg)
            except Exception as error:  # noqa: BLE001 - collected and re-raised
                errors.append(error)
        raise_collected(errors)
        return True

    def dispatch(self, event: Event, ctx: Mapping[str, Any] | None = None) -> None:
        self._service_bus.dispatch(event, ctx)

    def dispatch_from(self, producer: Any, ctx: Mapping[str, Any] | None = None) -> None:
        """Dispatch, and thereby drain, every pending event of ``producer``."""
        errors: list[Exception] = []
        for event in producer.events():
            try:
                self.dispatch(event, ctx)
            except Exception as error:  # noqa: BLE001 - collected and re-raised
                errors.append(error)
        raise_collected(errors)

    def use(self, middleware: MiddlewareFunc) -> None:
        self._service_bus.use(middleware)

    def register_view(self, view: View) -> None:
        self._subscribe(view.subscribed_to, self._views, view)

    def register_policy(self, policy: Policy) -> None:
        self._subscribe(policy.subscribed_to, self._policies, policy)

    def _subscribe(self, event_types: list[str], registry: dict[str, list[Any]], subscriber: Any) -> None:
        errors: list[Exception] = []
        for event_type in event_types:
            registry[event_type].append(subscriber)
            try:
                self._service_bus.register(event_type, self.handle)
            except Exception as error:  # noqa: BLE001 - collected and re-raised
                errors.append(error)
        raise_collected(errors)

    def _dispatch_to_views(self, event: Event) -> None:
        errors: list[Exception] = []
        for view in self._views.get(event.type, ()):
            try:
                view.mutate_when(event)
            except Exception as error:  # noqa: BLE001 - collected and re-raised
                errors.append(error)
        raise_collected(errors)

    def _dispatch_to_policies(self, event: Event) -> None:
        errors: list[Exception] = []
        for policy in self._policies.get(event.type, ()):
            try:
                command = policy.when(event)
                if command is not None:
                    self._command_bus.dispatch(command, {})
            except Exception as error:  # noqa: BLE001 - collected and re-raised
                errors.append(error)
        raise_collected(errors)