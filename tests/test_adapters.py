import pytest
from werkzeug.wrappers import Request

from dddframe.command import Command
from dddframe.entity_id import new_id
from dddframe.event import event_type
from dddframe.event_producer import EventProducer
from dddframe.example.hotel.adapters import (
    InMemoryGuests,
    RoomRepository,
    auth_msg_consumer,
    auth_msg_translator,
    guests_endpoint,
    room_endpoint,
)
from dddframe.example.hotel.domain import (
    CheckedOut,
    CreateRoom,
    Guest,
    GuestInRoom,
    Room,
    RoomCreated,
    RoomType,
)
from dddframe.query import QueryResponse


class _RecordingBus:
    def __init__(self, result=None):
        self.received = []
        self.result = result

    def dispatch(self, msg, ctx=None):
        self.received.append(msg)
        return self.result


def _event(payload):
    return EventProducer().register_event("aggType", new_id("ID123"), payload).get_first()


def test_auth_msg_translator_round_trip():
    original = _event(RoomCreated(RoomType.SINGLE))
    translated = auth_msg_translator(original.to_json().encode())
    assert translated.type == original.type
    assert translated.aggregate_type == "aggType"
    assert translated.aggregate_id.equals(original.aggregate_id)


def test_auth_msg_consumer_targets_auth():
    assert auth_msg_consumer().target == "auth"


def test_endpoints_paths_and_methods():
    assert guests_endpoint().path == "guests"
    assert guests_endpoint().methods == []
    assert room_endpoint().path == "room"
    assert room_endpoint().methods == []


def test_room_endpoint_dispatches_create_room():
    endpoint = room_endpoint()
    bus = _RecordingBus()
    endpoint.register_command_bus(bus)
    request = Request.from_values(
        path="/api/room", method="POST", json={"number": 7, "room_type": "double"}
    )
    response = endpoint.handler()(request)
    assert response.status_code == 202
    assert isinstance(bus.received[0], Command)
    assert bus.received[0].body == CreateRoom(7, RoomType.DOUBLE)


def test_room_endpoint_rejects_bad_body():
    endpoint = room_endpoint()
    endpoint.register_command_bus(_RecordingBus())
    request = Request.from_values(path="/api/room", method="POST", json={"room_type": "single"})
    assert endpoint.handler()(request).status_code == 400


def test_guests_endpoint_answers_with_guest():
    endpoint = guests_endpoint()
    bus = _RecordingBus(QueryResponse(Guest(3, "Ann"), 1, 0, 1))
    endpoint.register_query_bus(bus)
    request = Request.from_values(path="/api/guests", query_string={"number": "3"})
    response = endpoint.handler()(request)
    assert response.status_code == 200
    assert response.get_json()["items"] == {"id": 3, "name": "Ann"}
    assert bus.received[0].filter == GuestInRoom(3)


def test_guests_endpoint_requires_number():
    endpoint = guests_endpoint()
    endpoint.register_query_bus(_RecordingBus())
    request = Request.from_values(path="/api/guests")
    assert endpoint.handler()(request).status_code == 400


def test_in_memory_guests_view():
    guests = InMemoryGuests()
    assert guests.subscribed_to == [event_type(CheckedOut)]
    guests.mutate_when(_event(CheckedOut()))
    assert guests.guest_in_room(1) is None


def test_room_repository_crud():
    repo = RoomRepository()
    room = Room(101, RoomType.SINGLE)
    repo.save(room)
    assert repo.load(new_id(101)) is room
    assert repo.load_all() == [room]
    repo.update(room)
    assert repo.load_all() == [room]
    repo.delete(new_id(101))
    assert repo.load_all() == []


def test_room_repository_missing_room():
    with pytest.raises(KeyError):
        RoomRepository().load(new_id(5))