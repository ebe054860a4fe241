"""HTTP endpoint that turns requests into queries."""

from __future__ import annotations

import dataclasses
import enum
import json
import logging
from collections.abc import Iterable
from datetime import datetime
from http import HTTPStatus
from typing import Any

from werkzeug.wrappers import Request, Response

from ..query import Query, QueryResponse
from ..value import Value
from .endpoint import Endpoint, QueryTranslator, RequestHandler

_log = logging.getLogger(__name__)


def _jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, Value):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"{type(obj).__name__} is not JSON serialisable")


def _encode_response(result: QueryResponse) -> str:
    body = {
        "items": result.items,
        "total_pages": result.total_pages,
        "page_number": result.page_number,
        "has_prev": result.has_prev,
        "prev": result.prev,
        "has_next": result.has_next,
        "next": result.next,
    }
    return json.dumps(body, default=_jsonable) + "\n"


class QueryEndpoint(Endpoint):
    """Translates each request into a query and answers with the JSON result."""

    def __init__(
        self,
        path: str,
        methods: Iterable[str] | None,
        translator: QueryTranslator | None,
    ) -> None:
        super().__init__(path, methods)
        self._translator = translator
        self._query_bus: Any = None

    def register_query_bus(self, bus: Any) -> None:
        if self._query_bus is not None:
            _log.warning("Query bus already set for endpoint %s", self.path)
        self._query_bus = bus

    def handler(self) -> RequestHandler:
        def handle(request: Request) -> Response:
            if self._translator is None:
                return self._error("No translator for GET method", HTTPStatus.NOT_ACCEPTABLE)
            try:
                query = self._translator(request)
            except Exception as error:  # noqa: BLE001 - any translation failure is a bad request
                _log.warning("Error translating query: %s", error)
                return self._error("Bad request", HTTPStatus.BAD_REQUEST)
            if query is None:
                _log.error("query translator returned nil query")
                return self._error("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR)
            if not isinstance(query, Query) or self._query_bus is None:
                _log.warning("No query bus to dispatch query %r", query)
                return self._error("Not acceptable", HTTPStatus.NOT_ACCEPTABLE)
            try:
                result = self._query_bus.dispatch(query, {"request": request})
            except Exception as error:  # noqa: BLE001 - reported to the client as a server error
                _log.error("Error dispatching query: %s", error)
                return self._error("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR)
            try:
                body = _encode_response(result)
            except (TypeError, ValueError) as error:
                _log.error("Error encoding response: %s", error)
                return self._error("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR)
            return Response(body, status=int(HTTPStatus.OK), mimetype="application/json")

        return handle