"""Assembly of the auth bounded context."""

from __future__ import annotations

import queue

from ..bounded_context import BoundedContext, ContextConfiguration
from ..event import Event, event_from_json
from ..inmemory.message_consumer import InMemoryMessageConsumer
from ..message_consumer import MessageConsumer

_EXTERNAL_QUEUE_SIZE = 1000


def ext_msg_translator(data: bytes) -> Event:
    """Turn a JSON event from the external system into an event."""
    return event_from_json(data.decode())


def ext_msg_consumer() -> InMemoryMessageConsumer:
    """Consume external events from an in-process queue."""
    external_queue: queue.Queue[str] = queue.Queue(maxsize=_EXTERNAL_QUEUE_SIZE)
    return InMemoryMessageConsumer(MessageConsumer("external", ext_msg_translator), external_queue)


def hotel_msg_translator(data: bytes) -> Event:
    """Turn a JSON event published by the hotel context into an event."""
    return event_from_json(data.decode())


def hotel_msg_consumer() -> MessageConsumer:
    return MessageConsumer("hotel", hotel_msg_translator)


def auth_context() -> BoundedContext:
    return (
        BoundedContext(ContextConfiguration(name="auth"))
        .register_message_consumer(hotel_msg_consumer())
        .register_message_consumer(ext_msg_consumer())
    )