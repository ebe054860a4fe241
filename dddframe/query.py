"""Queries and paged query responses."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .typenames import type_name


@dataclass(frozen=True)
class Query:
    """A read request; its type is the filter's type name."""

    filter: Any
    page_index: int = 0
    page_size: int = 1

    @property
    def type(self) -> str:
        return type_name(self.filter)


@dataclass(frozen=True)
class QueryResponse:
    """A page of query results."""

    items: Any
    count: int = 1
    page_index: int = 0
    page_size: int = 1

    @property
    def total_pages(self) -> int:
        return math.ceil(self.count / self.page_size)

    @property
    def page_number(self) -> int:
        return self.page_index + 1

    @property
    def has_prev(self) -> bool:
        return self.page_index > 0

    @property
    def prev(self) -> int:
        return self.page_number - 1 if self.has_prev else 0

    @property
    def has_next(self) -> bool:
        return self.page_number * self.page_size < self.count

    @property
    def next(self) -> int:
        return self.page_number + 1 if self.has_next else 0


def query_type(filter: Any) -> str:
    """Return the query type name for a filter instance or class."""
    return type_name(filter)