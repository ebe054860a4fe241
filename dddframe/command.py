"""Commands: requests to change state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .typenames import type_name


@dataclass(frozen=True)
class Command:
    """Wraps a command body; its type is the body's type name."""

    body: Any

    @property
    def type(self) -> str:
        return type_name(self.body)


def command_type(body: Any) -> str:
    """Return the command type name for a body instance or class."""
    return type_name(body)