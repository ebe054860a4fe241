"""HTTP endpoint that turns requests into commands."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from http import HTTPStatus
from typing import Any

from werkzeug.wrappers import Request, Response

from ..command import Command
from .endpoint import CommandTranslator, Endpoint, RequestHandler

_log = logging.getLogger(__name__)


class CommandEndpoint(Endpoint):
    """Translates each request into a command and dispatches it on a command bus."""

    def __init__(
        self,
        path: str,
        methods: Iterable[str] | None,
        translator: CommandTranslator | None,
    ) -> None:
        super().__init__(path, methods)
        self._translator = translator
        self._command_bus: Any = None

    def register_command_bus(self, bus: Any) -> None:
        if self._command_bus is not None:
            _log.warning("Command bus already set for endpoint %s", self.path)
        self._command_bus = bus

    def handler(self) -> RequestHandler:
        def handle(request: Request) -> Response:
            if self._translator is None:
                return self._error("No translator for found", HTTPStatus.NOT_ACCEPTABLE)
            try:
                command = self._translator(request)
            except Exception as error:  # noqa: BLE001 - any translation failure is a bad request
                _log.warning("Error translating command: %s", error)
                return self._error("Bad request", HTTPStatus.BAD_REQUEST)
            if command is None:
                _log.error("command translator returned nil command")
                return self._error("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR)
            if not isinstance(command, Command) or self._command_bus is None:
                _log.warning("No command bus to dispatch command %r", command)
                return self._error("Not acceptable", HTTPStatus.NOT_ACCEPTABLE)
            try:
                self._command_bus.dispatch(command, {"request": request})
            except Exception as error:  # noqa: BLE001 - reported to the client as a server error
                _log.error("Error dispatching command: %s", error)
                return self._error("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR)
            return Response(status=int(HTTPStatus.ACCEPTED))

        return handle