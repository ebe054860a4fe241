"""Entity identifiers."""

from __future__ import annotations

import uuid
from typing import Any

from .value import Value


class ID(Value):
    """An identifier; two identifiers are equal when their text forms match."""

    __slots__ = ()

    def equals(self, other: Any) -> bool:
        if not isinstance(other, ID):
            return False
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))


def new_id(value: Any) -> ID:
    """Create an identifier from a string or an integer."""
    if isinstance(value, str):
        return ID(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return ID(value)
    raise TypeError("Invalid ID type")


def generate_uuid() -> ID:
    """Create an identifier holding a random UUID."""
    return new_id(str(uuid.uuid4()))