import json
from dataclasses import dataclass

import pytest
from werkzeug.test import EnvironBuilder

from dddframe.aggregate import Aggregate
from dddframe.bounded_context import BoundedContext, ContextConfiguration
from dddframe.command import Command
from dddframe.command_service import CommandService
from dddframe.entity_id import new_id
from dddframe.errors import MultipleErrors
from dddframe.event_producer import EventProducer
from dddframe.message_consumer import MessageConsumer
from dddframe.policy import Policy
from dddframe.query import Query, QueryResponse
from dddframe.query_service import QueryService
from dddframe.view import View
from dddframe.web.command_endpoint import CommandEndpoint
from dddframe.web.query_endpoint import QueryEndpoint


@dataclass
class OpenRoom:
    number: int


@dataclass
class RoomOpened:
    number: int


@dataclass
class GuestArrived:
    number: int


@dataclass
class ByName:
    name: str


class RoomsView(View):
    def __init__(self):
        super().__init__(RoomOpened)
        self.seen = []

    def mutate_when(self, event):
        self.seen.append(event.payload)


class ArrivalPolicy(Policy):
    def __init__(self):
        super().__init__(GuestArrived)

    def when(self, event):
        return Command(OpenRoom(event.payload.number))


def _event(payload):
    return EventProducer().register_event("aggType", new_id("ID123"), payload).get_first()


def _recording_service():
    executed = []
    service = CommandService(lambda command, ctx: executed.append(command.body), OpenRoom)
    return service, executed


def test_default_name():
    assert BoundedContext().name == "default"
    assert BoundedContext(ContextConfiguration(name="")).name == "default"


def test_configured_name():
    assert BoundedContext(ContextConfiguration(name="hotel")).name == "hotel"


def test_invalid_config():
    with pytest.raises(TypeError, match="Invalid config"):
        BoundedContext({"name": "hotel"})


def test_query_endpoint_registration_errors():
    context = BoundedContext()
    context.register_query_endpoint(QueryEndpoint("guests", [], lambda r: None))
    with pytest.raises(ValueError, match="already registered"):
        context.register_query_endpoint(QueryEndpoint("guests", ["GET"], lambda r: None))
    with pytest.raises(ValueError, match="has no methods"):
        context.register_query_endpoint(QueryEndpoint("rooms", None, lambda r: None))


def test_command_endpoint_registration_errors():
    context = BoundedContext()
    context.register_command_endpoint(CommandEndpoint("room", ["POST"], lambda r: None))
    with pytest.raises(ValueError, match="already registered"):
        context.register_command_endpoint(CommandEndpoint("room", ["POST"], lambda r: None))
    with pytest.raises(ValueError, match="has no methods"):
        context.register_command_endpoint(CommandEndpoint("other", None, lambda r: None))


def test_query_endpoint_uses_context_query_bus():
    context = BoundedContext()
    endpoint = QueryEndpoint("guests", ["GET"], lambda r: Query(ByName(r.args["name"])))
    result = context.register_query_service(
        QueryService(lambda query, ctx: QueryResponse([query.filter.name]), ByName)
    ).register_query_endpoint(endpoint)
    assert result is context
    request = EnvironBuilder(path="/guests", query_string={"name": "ada"}).get_request()
    response = endpoint.handler()(request)
    assert response.status_code == 200
    assert json.loads(response.get_data(as_text=True))["items"] == ["ada"]


def test_command_endpoint_uses_context_command_bus():
    context = BoundedContext()
    service, executed = _recording_service()
    endpoint = CommandEndpoint("room", ["POST"], lambda r: Command(OpenRoom(r.json["number"])))
    context.register_command_service(service).register_command_endpoint(endpoint)
    request = EnvironBuilder(path="/room", method="POST", json={"number": 7}).get_request()
    response = endpoint.handler()(request)
    assert response.status_code == 202
    assert executed == [OpenRoom(7)]


def test_command_service_publishes_to_context_event_bus():
    context = BoundedContext()
    view = RoomsView()

    def execute(command, ctx):
        room = Aggregate(new_id(command.body.number))
        room.register_event(room.aggregate_type, room.id, RoomOpened(command.body.number))
        service.dispatch_from(room, ctx)

    service = CommandService(execute, OpenRoom)
    context.register_view(view).register_command_service(service)
    context.command_bus.dispatch(Command(OpenRoom(7)))
    assert view.seen == [RoomOpened(7)]


def test_policy_issues_command():
    context = BoundedContext()
    service, executed = _recording_service()
    context.register_policy(ArrivalPolicy()).register_command_service(service)
    context.event_bus.dispatch(_event(GuestArrived(4)))
    assert executed == [OpenRoom(4)]


def test_one_view_per_event_type():
    context = BoundedContext().register_view(RoomsView())
    with pytest.raises(MultipleErrors):
        context.register_view(RoomsView())


def test_message_consumer_registration():
    context = BoundedContext()
    view = RoomsView()
    event = _event(RoomOpened(3))
    consumer = MessageConsumer("auth", lambda data: event)
    duplicate = MessageConsumer("auth", lambda data: event)
    context.register_view(view).register_message_consumer(consumer)
    context.register_message_consumer(duplicate)
    assert context.message_consumers == {"auth": consumer}
    consumer.process_message(b"{}")
    assert view.seen == [RoomOpened(3)]
    with pytest.raises(RuntimeError, match="EventBus not set"):
        duplicate.process_message(b"{}")