"""Consumes JSON events from an in-process queue."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any

_log = logging.getLogger(__name__)

_POLL_INTERVAL = 0.05


class InMemoryMessageConsumer:
    """Feeds messages from a queue to a base consumer on a background thread."""

    def __init__(self, base: Any, channel: queue.Queue | None) -> None:
        if channel is None:
            raise ValueError("queue cannot be nil")
        self._base = base
        self._channel = channel
        self._running = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def target(self) -> str:
        return self._base.target

    def set_event_bus(self, event_bus: Any) -> None:
        self._base.set_event_bus(event_bus)

    def process_message(self, msg: bytes) -> None:
        self._base.process_message(msg)

    def start(self) -> None:
        if self._running.is_set():
            return
        self._running.set()
        self._thread = threading.Thread(target=self._run, name="in-memory-consumer", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._running.clear()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None

    @property
    def running(self) -> bool:
        return self._running.is_set()

    def _run(self) -> None:
        while self._running.is_set():
            try:
                message = self._channel.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                continue
            data = message.encode() if isinstance(message, str) else message
            try:
                self._base.process_message(data)
            except Exception:  # noqa: BLE001 - a bad message must not stop the consumer
                _log.exception("failed to process message")