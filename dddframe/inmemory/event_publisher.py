"""Publishes events as JSON strings onto an in-process queue."""

from __future__ import annotations

import queue
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..event import Event
from ..ports import PUBLISH_EVENT
from ..ports import EventPublisher as BaseEventPublisher
from ..service_bus import HandlerFunc, MiddlewareFunc


@dataclass
class ChannelSettings:
    buffer_size: int = 0


@dataclass
class ProducerSettings:
    message_format: str = ""
    message_key: str = ""


@dataclass
class EventPublisherConfiguration:
    channel_settings: ChannelSettings = field(default_factory=ChannelSettings)
    producer_settings: ProducerSettings = field(default_factory=ProducerSettings)


class EventPublisher(BaseEventPublisher):
    """Puts each published event, as JSON, on a queue shared with consumers."""

    def __init__(self) -> None:
        self._queue: queue.Queue[str] = queue.Queue()
        self._closed = threading.Event()

    def publish(self, event: Event) -> None:
        if self._closed.is_set():
            raise RuntimeError("publisher is closed")
        self._queue.put(event.to_json())

    def close(self) -> None:
        self._closed.set()

    def middleware(self) -> MiddlewareFunc:
        """Middleware publishing each event unless the context disables it."""

        def wrap(next_handler: HandlerFunc) -> HandlerFunc:
            def handle(msg: Any, ctx: Mapping[str, Any]) -> Any:
                flag = ctx.get(PUBLISH_EVENT)
                if not isinstance(flag, bool) or flag:
                    if not isinstance(msg, Event):
                        raise TypeError("payload is not an Event")
                    self.publish(msg)
                return next_handler(msg, ctx)

            return handle

        return wrap

    @property
    def queue(self) -> queue.Queue[str]:
        return self._queue