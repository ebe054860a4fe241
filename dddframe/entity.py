"""Entities: objects with identity."""

from __future__ import annotations

from typing import Any

from .entity_id import ID


class Entity:
    """An object identified by its ID rather than by its attributes."""

    def __init__(self, id: ID) -> None:
        self._id = id

    @property
    def id(self) -> ID:
        return self._id

    def equals(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return False
        return self._id.equals(other.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self._id)