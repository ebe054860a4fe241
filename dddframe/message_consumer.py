"""Consumers that turn incoming messages into events on an event bus."""

from __future__ import annotations

import logging
from typing import Any

from .ports import PUBLISH_EVENT, MessageTranslator

_log = logging.getLogger(__name__)


class TransportNotConfiguredError(RuntimeError):
    """The consumer has no transport to receive messages from."""


class MessageConsumer:
    """Translates raw messages from a target context and dispatches them locally.

    This base consumer has no transport; wrap it in a transport-specific
    consumer to start receiving messages.
    """

    def __init__(self, target: str, translator: MessageTranslator | None) -> None:
        self._target = target
        self._translator = translator
        self._event_bus: Any = None

    def set_event_bus(self, event_bus: Any) -> None:
        self._event_bus = event_bus

    @property
    def target(self) -> str:
        return self._target

    def process_message(self, msg: bytes) -> None:
        """Translate ``msg`` and dispatch the event without re-publishing it."""
        if self._translator is None:
            raise RuntimeError("MessageTranslator not set")
        if self._event_bus is None:
            raise RuntimeError("EventBus not set")
        event = self._translator(msg)
        self._event_bus.dispatch(event, {PUBLISH_EVENT: False})

    def start(self) -> None:
        """Fail: receiving messages needs a transport-specific consumer."""
        self._no_transport("start")

    def stop(self) -> None:
        """Fail: there is no transport to stop."""
        self._no_transport("stop")

    def _no_transport(self, action: str) -> None:
        message = f"{type(self).__name__}: need a concrete implementation"
        _log.error("cannot %s consumer for target %s: %s", action, self._target, message)
        raise TransportNotConfiguredError(message)