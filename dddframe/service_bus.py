"""Routes messages to a single handler per message type through middleware."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

_log = logging.getLogger(__name__)

HandlerFunc = Callable[[Any, Mapping[str, Any]], Any]
MiddlewareFunc = Callable[[HandlerFunc], HandlerFunc]


class DuplicateHandlerError(ValueError):
    """A handler is already registered for the message type."""


class HandlerNotFoundError(LookupError):
    """No handler is registered for the message type."""


class InvalidPayloadError(TypeError):
    """The dispatched object is not a message with a type."""


class ServiceBus:
    """Dispatches messages, by their ``type``, to registered handlers.

    Handlers are called as ``handler(msg, ctx)`` where ``ctx`` is a mapping of
    request-scoped values.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, HandlerFunc] = {}
        self._middleware: list[MiddlewareFunc] = []

    def register(self, to: str, handler: HandlerFunc) -> None:
        if to in self._handlers:
            raise DuplicateHandlerError("only one handler per message type is allowed")
        self._handlers[to] = handler

    def handlers(self) -> dict[str, HandlerFunc]:
        return dict(self._handlers)

    def use(self, *args: MiddlewareFunc) -> None:
        """Append middleware; the first one added runs outermost."""
        self._middleware.extend(args)

    def dispatch(self, msg: Any, ctx: Mapping[str, Any] | None = None) -> Any:
        _validate_payload(msg)
        try:
            handler = self._handlers[msg.type]
        except KeyError:
            raise HandlerNotFoundError(
                f"ServiceBus - handler not found for message {msg.type}"
            ) from None
        for middleware in reversed(self._middleware):
            handler = middleware(handler)
        return handler(msg, {} if ctx is None else ctx)


def _validate_payload(msg: Any) -> None:
    if msg is None or not isinstance(getattr(msg, "type", None), str):
        raise InvalidPayloadError("command must be a struct")


def logger() -> MiddlewareFunc:
    """Middleware that logs every dispatched message type."""

    def middleware(next_handler: HandlerFunc) -> HandlerFunc:
        def handle(msg: Any, ctx: Mapping[str, Any]) -> Any:
            _log.info("[ServiceBus] dispatching %s", msg.type)
            return next_handler(msg, ctx)

        return handle

    return middleware