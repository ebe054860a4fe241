"""The hotel domain: rooms, guests and the checkout policy."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ...aggregate import Aggregate
from ...command import Command
from ...entity_id import new_id
from ...event import Event, event_type, map_event_payload
from ...policy import Policy
from ...view import View

_log = logging.getLogger(__name__)


class RoomType(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CreateRoom:
    number: int
    room_type: RoomType


@dataclass(frozen=True)
class BookRoom:
    number: int
    from_: datetime
    to: datetime


@dataclass(frozen=True)
class CheckoutGuest:
    room_number: int = 0


@dataclass(frozen=True)
class RoomCreated:
    room_type: RoomType


@dataclass(frozen=True)
class RoomBooked:
    from_: datetime
    to: datetime


@dataclass(frozen=True)
class GuestLocationReceived:
    mobile_app_id: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class CheckedOut:
    pass


@dataclass(frozen=True)
class GuestInRoom:
    number: int


@dataclass
class Guest:
    id: int
    name: str


class Room(Aggregate):
    """A hotel room; records an event when created and when booked."""

    def __init__(self, number: int, room_type: RoomType) -> None:
        super().__init__(new_id(number))
        self._room_type = RoomType(room_type)
        self._available_from = datetime.now()
        self.register_event(self.aggregate_type, self.id, RoomCreated(self._room_type))

    @property
    def room_type(self) -> RoomType:
        return self._room_type

    def is_available(self, from_: datetime) -> bool:
        return self._available_from <= from_

    def book(self, from_: datetime, to: datetime) -> None:
        """Book the room for the period, if it is available from its start."""
        if self.is_available(from_):
            self.register_event(self.aggregate_type, self.id, RoomBooked(from_, to))


class Guests(View, ABC):
    """A view of the guests staying in the hotel."""

    def __init__(self, add: Callable[[Guest], None]) -> None:
        super().__init__(CheckedOut)
        self._add = add

    def mutate_when(self, event: Event) -> None:
        if event.type != event_type(CheckedOut):
            raise ValueError("unknown event type")
        payload = map_event_payload(event, CheckedOut)
        _log.info("Guest %s checked out", payload)

    @abstractmethod
    def guest_in_room(self, id: int) -> Guest | None:
        """Return the guest staying in room ``id``, if any."""


def is_checked_out(latitude: float, longitude: float) -> bool:
    """Whether a guest's reported location means they have left the hotel."""
    return latitude < 0 and longitude < 0


class Checkout(Policy):
    """When a guest's location shows they have left, check them out."""

    def __init__(self) -> None:
        super().__init__(GuestLocationReceived)

    def when(self, event: Event) -> Command | None:
        if event.type != event_type(GuestLocationReceived):
            raise ValueError("unknown event type")
        payload = map_event_payload(event, GuestLocationReceived)
        if is_checked_out(payload.latitude, payload.longitude):
            return Command(CheckoutGuest())
        return None