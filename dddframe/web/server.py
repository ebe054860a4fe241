"""A small WSGI server routing requests to registered endpoints."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from werkzeug.serving import BaseWSGIServer, make_server
from werkzeug.wrappers import Request, Response

from .endpoint import Endpoint, RequestHandler

_log = logging.getLogger(__name__)

_SHUTDOWN_TIMEOUT = 5.0


@dataclass(frozen=True)
class _Route:
    path: str
    methods: frozenset[str]
    handler: RequestHandler


def _split_address(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid listen address {addr!r}")
    return host.strip("[]"), int(port)


class HttpServer:
    """Serves registered endpoints under ``/api/`` on a background thread."""

    def __init__(self, addr: str = "") -> None:
        self._addr = addr or ":8080"
        self._routes: list[_Route] = []
        self._server: BaseWSGIServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def address(self) -> str:
        return self._addr

    @property
    def port(self) -> int:
        """The bound port while running, otherwise the configured one."""
        if self._server is not None:
            return self._server.server_port
        return _split_address(self._addr)[1]

    def register_endpoint(self, endpoint: Endpoint) -> None:
        path = "/api/" + endpoint.path
        methods = endpoint.methods or []
        _log.info("registering %s endpoints at %s", ", ".join(methods), path)
        self._routes.append(
            _Route(path, frozenset(method.upper() for method in methods), endpoint.handler())
        )

    def wsgi_app(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        request = Request(environ)
        response = self._route(request)
        return response(environ, start_response)

    __call__ = wsgi_app

    def _route(self, request: Request) -> Response:
        path_known = False
        for route in self._routes:
            if route.path != request.path:
                continue
            path_known = True
            if request.method in route.methods:
                return route.handler(request)
        if path_known:
            return Response(status=int(HTTPStatus.METHOD_NOT_ALLOWED))
        return Response(
            "404 page not found\n", status=int(HTTPStatus.NOT_FOUND), mimetype="text/plain"
        )

    def start(self) -> None:
        """Start listening; returns once the socket is bound."""
        if self._server is not None:
            return
        host, port = _split_address(self._addr)
        _log.info("starting to listen at %s", self._addr)
        self._server = make_server(host or "0.0.0.0", port, self.wsgi_app, threaded=True)
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="http-server", daemon=True
        )
        self._thread.start()
        _log.info("started listening at %s", self._addr)

    def stop(self) -> None:
        """Stop serving and release the socket."""
        if self._server is None:
            return
        _log.info("stopping listening at %s", self._addr)
        self._server.shutdown()
        if self._thread is not None:
            self._thread.join(timeout=_SHUTDOWN_TIMEOUT)
        self._server.server_close()
        self._server = None
        self._thread = None