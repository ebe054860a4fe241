from dataclasses import dataclass

import pytest

from dddframe.command import Command
from dddframe.command_service import CommandService
from dddframe.event_producer import EventProducer


@dataclass
class SampleCommand:
    name: str = ""


class RecordingEventBus:
    def __init__(self):
        self.calls = []

    def dispatch_from(self, producer, ctx=None):
        self.calls.append((producer, ctx))


def test_command_service():
    received = []
    service = CommandService(lambda cmd, ctx: received.append(cmd), SampleCommand())
    assert service.subscribed_to[0] == f"{SampleCommand.__module__}.SampleCommand"

    cmd = Command(SampleCommand(name="value"))
    service.executor(cmd, {})
    assert received == [cmd]


def test_subscribes_to_every_type_in_order():
    @dataclass
    class Other:
        pass

    service = CommandService(lambda cmd, ctx: None, SampleCommand, Other)
    assert service.subscribed_to == [
        f"{SampleCommand.__module__}.SampleCommand",
        f"{Other.__module__}.{Other.__qualname__}",
    ]


def test_with_event_bus_returns_service_and_dispatches():
    bus = RecordingEventBus()
    service = CommandService(lambda cmd, ctx: None, SampleCommand)
    assert service.with_event_bus(bus) is service

    producer = EventProducer()
    ctx = {"key": "value"}
    service.dispatch_from(producer, ctx)
    assert bus.calls == [(producer, ctx)]


def test_dispatch_from_without_event_bus():
    service = CommandService(lambda cmd, ctx: None, SampleCommand)
    with pytest.raises(RuntimeError, match="EventBus not set"):
        service.dispatch_from(EventProducer())