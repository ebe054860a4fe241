"""An event log persisted in MongoDB, one collection per aggregate type."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

import pymongo

from ..event import Event

_log = logging.getLogger(__name__)

DB_NAME = "organization"
AGGREGATE_ID_KEY = "aggregateId"
_CONNECT_TIMEOUT_MS = 10_000


def _log_entry(event: Event) -> dict[str, Any]:
    return {
        AGGREGATE_ID_KEY: str(event.aggregate_id),
        "timestamp": int(event.time_stamp.timestamp()),
        "event": json.loads(event.to_json()),
    }


class MongoEventLog:
    """Appends events to, and reads them back from, a MongoDB database."""

    def __init__(self, uri: str | None = None, client: Any = None) -> None:
        if client is None:
            if uri is None:
                raise ValueError("either a URI or a client is required")
            client = pymongo.MongoClient(uri, serverSelectionTimeoutMS=_CONNECT_TIMEOUT_MS)
            client.admin.command("ping")
            _log.info("connected to MongoDB!")
        self._db = client[DB_NAME]

    def append(self, events: Iterable[Event], aggregate_type: str) -> list[Any]:
        """Store ``events`` in the collection of ``aggregate_type``; return the new IDs."""
        entries = [_log_entry(event) for event in events]
        if not entries:
            raise ValueError("must provide at least one event to append")
        result = self._db[aggregate_type].insert_many(entries)
        inserted = list(result.inserted_ids)
        _log.info("inserted multiple documents: %s", inserted)
        return inserted

    def events_of(self, aggregate_id: str, aggregate_type: str) -> list[dict[str, Any]]:
        """Return the stored events of one aggregate, oldest first."""
        cursor = self._db[aggregate_type].find(
            {AGGREGATE_ID_KEY: aggregate_id},
            sort=[("timestamp", pymongo.ASCENDING)],
        )
        events = [dict(entry["event"]) for entry in cursor]
        _log.info("found events: %s", events)
        return events