"""Aggregate roots."""

from __future__ import annotations

from .entity import Entity
from .entity_id import ID
from .event_producer import EventProducer
from .typenames import type_name


class Aggregate(Entity, EventProducer):
    """An entity that records the domain events it raises."""

    def __init__(self, id: ID) -> None:
        Entity.__init__(self, id)
        EventProducer.__init__(self)

    @property
    def aggregate_type(self) -> str:
        """The fully qualified name of the concrete aggregate class."""
        return type_name(self)