"""Aggregation of several errors raised while fanning out work."""

from __future__ import annotations

from collections.abc import Iterable


class MultipleErrors(Exception):
    """Raised when one or more steps of a fan-out operation failed."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors = tuple(errors)
        joined = " ".join(str(error) for error in self.errors)
        super().__init__(f"Errors encountered: [{joined}]")


def raise_collected(errors: Iterable[BaseException]) -> None:
    """Raise ``MultipleErrors`` if any errors were collected."""
    collected = list(errors)
    if collected:
        raise MultipleErrors(collected)