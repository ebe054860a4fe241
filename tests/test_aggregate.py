from dataclasses import dataclass

from dddframe.aggregate import Aggregate
from dddframe.entity_id import generate_uuid
from dddframe.event import event_type


@dataclass
class NameUpdated:
    name: str


class MockAggregate(Aggregate):
    def __init__(self, id, name):
        super().__init__(id)
        self.name = name

    def update_name(self, name):
        self.name = name
        self.register_event(self.aggregate_type, self.id, NameUpdated(name))


def test_new_aggregate():
    uid = generate_uuid()
    agg = MockAggregate(uid, "AAggregate")
    assert agg.aggregate_type == f"{MockAggregate.__module__}.MockAggregate"
    assert agg.id.equals(uid)
    assert agg.name == "AAggregate"


def test_update_name():
    agg = MockAggregate(generate_uuid(), "AAggregate")
    agg.update_name("CompanyB")

    events = agg.events()
    assert len(events) == 1
    event = events[0]
    assert event.aggregate_id == agg.id
    assert event.aggregate_type == agg.aggregate_type
    assert event.type == f"{NameUpdated.__module__}.NameUpdated"
    assert event.type == event_type(NameUpdated)
    assert event.payload == NameUpdated(name="CompanyB")

    agg.clear_events()
    assert len(agg.events()) == 0

    agg.update_name("CompanyC")
    events = agg.events()
    assert len(events) == 1
    assert events[0].aggregate_id == agg.id