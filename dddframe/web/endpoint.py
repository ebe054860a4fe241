"""HTTP endpoints that expose a context's buses."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from http import HTTPStatus

from werkzeug.wrappers import Request, Response

from ..command import Command
from ..query import Query

RequestHandler = Callable[[Request], Response]
"""Turns an HTTP request into an HTTP response."""

CommandTranslator = Callable[[Request], "Command | None"]
"""Builds the command carried by an HTTP request."""

QueryTranslator = Callable[[Request], "Query | None"]
"""Builds the query carried by an HTTP request."""


class Endpoint(ABC):
    """An HTTP route: a path, the methods it accepts and a request handler."""

    def __init__(self, path: str, methods: Iterable[str] | None) -> None:
        self._path = path
        self._methods = None if methods is None else list(methods)

    @property
    def path(self) -> str:
        return self._path

    @property
    def methods(self) -> list[str] | None:
        """The accepted HTTP methods, or ``None`` when none were given."""
        return None if self._methods is None else list(self._methods)

    @abstractmethod
    def handler(self) -> RequestHandler:
        """Return the function that serves requests to this endpoint."""

    @staticmethod
    def _error(message: str, status: HTTPStatus) -> Response:
        response = Response(f"{message}\n", status=int(status), mimetype="text/plain")
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response