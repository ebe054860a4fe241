from dataclasses import dataclass

from werkzeug.test import EnvironBuilder

from dddframe.command import Command
from dddframe.web.command_endpoint import CommandEndpoint


@dataclass
class Named:
    name: str


class RecordingBus:
    def __init__(self):
        self.dispatched = []

    def dispatch(self, command, ctx=None):
        self.dispatched.append(command)


class FailingBus:
    def dispatch(self, command, ctx=None):
        raise RuntimeError("dispatch failed")


def command_translator(request):
    return Command(Named(name="test"))


def post_request():
    return EnvironBuilder(path="/test", method="POST", json={"key": "value"}).get_request()


def test_command_endpoint_accepts_command():
    endpoint = CommandEndpoint("/test", ["POST", "PUT", "DELETE"], command_translator)
    assert endpoint.path == "/test"
    bus = RecordingBus()
    endpoint.register_command_bus(bus)
    response = endpoint.handler()(post_request())
    assert response.status_code == 202
    assert bus.dispatched == [Command(Named(name="test"))]


def test_missing_translator_is_not_acceptable():
    endpoint = CommandEndpoint("/test", ["POST"], None)
    endpoint.register_command_bus(RecordingBus())
    response = endpoint.handler()(post_request())
    assert response.status_code == 406
    assert response.get_data(as_text=True) == "No translator for found\n"


def test_translator_error_is_bad_request():
    def broken(request):
        raise ValueError("bad body")

    endpoint = CommandEndpoint("/test", ["POST"], broken)
    endpoint.register_command_bus(RecordingBus())
    response = endpoint.handler()(post_request())
    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Bad request\n"


def test_no_command_is_server_error():
    endpoint = CommandEndpoint("/test", ["POST"], lambda request: None)
    endpoint.register_command_bus(RecordingBus())
    response = endpoint.handler()(post_request())
    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Internal server error\n"


def test_dispatch_error_is_server_error():
    endpoint = CommandEndpoint("/test", ["POST"], command_translator)
    endpoint.register_command_bus(FailingBus())
    response = endpoint.handler()(post_request())
    assert response.status_code == 500


def test_non_command_is_not_acceptable():
    endpoint = CommandEndpoint("/test", ["POST"], lambda request: Named(name="x"))
    bus = RecordingBus()
    endpoint.register_command_bus(bus)
    response = endpoint.handler()(post_request())
    assert response.status_code == 406
    assert response.get_data(as_text=True) == "Not acceptable\n"
    assert bus.dispatched == []


def test_without_bus_is_not_acceptable():
    endpoint = CommandEndpoint("/test", ["POST"], command_translator)
    response = endpoint.handler()(post_request())
    assert response.status_code == 406


def test_registering_again_replaces_bus():
    endpoint = CommandEndpoint("/test", ["POST"], command_translator)
    first, second = RecordingBus(), RecordingBus()
    endpoint.register_command_bus(first)
    endpoint.register_command_bus(second)
    endpoint.handler()(post_request())
    assert first.dispatched == []
    assert len(second.dispatched) == 1