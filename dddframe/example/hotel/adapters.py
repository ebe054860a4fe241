"""Infrastructure adapters of the hotel context."""

from __future__ import annotations

from datetime import datetime

from werkzeug.wrappers import Request

from ...command import Command
from ...entity_id import ID, new_id
from ...event import Event, event_from_json
from ...message_consumer import MessageConsumer
from ...ports import Repository
from ...query import Query
from ...web.command_endpoint import CommandEndpoint
from ...web.query_endpoint import QueryEndpoint
from .domain import BookRoom, CreateRoom, Guest, GuestInRoom, Guests, Room, RoomType


def auth_msg_translator(data: bytes) -> Event:
    """Turn a JSON event published by the auth context into an event."""
    return event_from_json(data.decode())


def auth_msg_consumer() -> MessageConsumer:
    return MessageConsumer("auth", auth_msg_translator)


def _guests_query_translator(request: Request) -> Query:
    number = request.args.get("number", type=int)
    if number is None:
        raise ValueError("a room number is required")
    return Query(GuestInRoom(number), 0, 1)


def guests_endpoint() -> QueryEndpoint:
    return QueryEndpoint("guests", [], _guests_query_translator)


def _room_command_translator(request: Request) -> Command:
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "number" not in data:
        raise ValueError("a JSON object with a room number is required")
    number = int(data["number"])
    if "from" in data:
        start = datetime.fromisoformat(data["from"])
        end = datetime.fromisoformat(data["to"])
        return Command(BookRoom(number, start, end))
    return Command(CreateRoom(number, RoomType(data.get("room_type", RoomType.SINGLE.value))))


def room_endpoint() -> CommandEndpoint:
    return CommandEndpoint("room", [], _room_command_translator)


class InMemoryGuests(Guests):
    """The guests view kept in a dictionary keyed by room."""

    def __init__(self) -> None:
        self._store: dict[int, Guest] = {}
        super().__init__(self._put)

    def _put(self, guest: Guest) -> None:
        self._store[guest.id] = guest

    def guest_in_room(self, id: int) -> Guest | None:
        return self._store.get(id)


class RoomRepository(Repository[Room]):
    """Rooms kept in memory, keyed by ID."""

    def __init__(self) -> None:
        self._rooms: dict[ID, Room] = {}

    def save(self, aggregate: Room) -> None:
        self._rooms[aggregate.id] = aggregate

    def load(self, id: ID) -> Room:
        try:
            return self._rooms[id]
        except KeyError:
            raise KeyError("room not found") from None

    def load_all(self) -> list[Room]:
        return list(self._rooms.values())

    def delete(self, id: ID) -> None:
        self._rooms.pop(id, None)

    def update(self, aggregate: Room) -> None:
        self._rooms[aggregate.id] = aggregate


__all__ = [
    "InMemoryGuests",
    "RoomRepository",
    "auth_msg_consumer",
    "auth_msg_translator",
    "guests_endpoint",
    "new_id",
    "room_endpoint",
]