"""Immutable value objects compared by their content."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _sorted(items: list[Any]) -> list[Any]:
    try:
        return sorted(items)
    except TypeError:
        return sorted(items, key=repr)


def _format(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, Mapping):
        parts = (f"{_format(key)}:{_format(value[key])}" for key in _sorted(list(value)))
        return "map[" + " ".join(parts) + "]"
    if isinstance(value, (set, frozenset)):
        return "[" + " ".join(_format(item) for item in _sorted(list(value))) + "]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format(item) for item in value) + "]"
    return str(value)


class Value:
    """A value object: equal to another value object holding an equal value."""

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = value

    @property
    def value(self) -> Any:
        return self._value

    def equals(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return False
        return self._value == other._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        try:
            return hash(self._value)
        except TypeError:
            return hash(type(self._value))

    def __str__(self) -> str:
        return _format(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"