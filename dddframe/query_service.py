"""Application services that answer queries."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .query import Query, QueryResponse, query_type

QueryExecutor = Callable[[Query, Mapping[str, Any]], QueryResponse]


class QueryService:
    """Answers the query types it subscribes to."""

    def __init__(self, executor: QueryExecutor, *args: Any) -> None:
        self._subscribed_to = [query_type(query) for query in args]
        self._executor = executor

    @property
    def subscribed_to(self) -> list[str]:
        return list(self._subscribed_to)

    @property
    def executor(self) -> QueryExecutor:
        return self._executor