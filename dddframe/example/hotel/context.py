"""Assembly of the hotel bounded context."""

from __future__ import annotations

from ...bounded_context import BoundedContext, ContextConfiguration
from .adapters import (
    InMemoryGuests,
    RoomRepository,
    auth_msg_consumer,
    guests_endpoint,
    room_endpoint,
)
from .application import guests_service, room_service
from .domain import Checkout


def hotel_context() -> BoundedContext:
    """Build the hotel context with its policy, view, services and endpoints."""
    guests = InMemoryGuests()
    return (
        BoundedContext(ContextConfiguration(name="hotel"))
        .register_policy(Checkout())
        .register_view(guests)
        .register_command_endpoint(room_endpoint())
        .register_command_service(room_service(RoomRepository()))
        .register_query_endpoint(guests_endpoint())
        .register_query_service(guests_service(guests))
        .register_message_consumer(auth_msg_consumer())
    )