"""Domain events and their JSON form."""

from __future__ import annotations

import dataclasses
import enum
import json
import re
from datetime import datetime
from typing import Any, TypeVar

from .entity_id import ID, new_id
from .typenames import type_name
from .value import Value

T = TypeVar("T")

_TIMESTAMP = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>[Zz]|[+-]\d{2}:\d{2})$"
)

_DATETIME_ANNOTATIONS = ("datetime", "datetime.datetime")


def _format_timestamp(stamp: datetime) -> str:
    if stamp.tzinfo is None:
        stamp = stamp.astimezone()
    return stamp.isoformat()


def _parse_timestamp(text: str) -> datetime:
    match = _TIMESTAMP.match(text)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {text!r}")
    fraction = (match["frac"] or "")[:6].ljust(6, "0")
    zone = "+00:00" if match["tz"] in ("Z", "z") else match["tz"]
    return datetime.fromisoformat(f"{match['base']}.{fraction}{zone}")


def _encode(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}
    if isinstance(obj, datetime):
        return _format_timestamp(obj)
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, Value):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"{type(obj).__name__} is not JSON serialisable")


@dataclasses.dataclass(frozen=True)
class Event:
    """Something that happened to an aggregate."""

    aggregate_type: str
    aggregate_id: ID
    event_type: str
    time_stamp: datetime
    payload: Any

    @property
    def type(self) -> str:
        return self.event_type

    def to_json(self) -> str:
        """Serialise the event to a JSON string."""
        return json.dumps(
            {
                "aggregate_id": str(self.aggregate_id),
                "aggregate_type": self.aggregate_type,
                "event_type": self.event_type,
                "payload": self.payload,
                "time_stamp": _format_timestamp(self.time_stamp),
            },
            default=_encode,
        )


def event_type(payload: Any) -> str:
    """Return the event type name for a payload instance or class."""
    return type_name(payload)


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"event field {key!r} must be a string")
    return value


def event_from_json(json_string: str) -> Event:
    """Rebuild an event from its JSON form; the payload stays plain JSON data."""
    data = json.loads(json_string)
    if not isinstance(data, dict):
        raise ValueError("event JSON must be an object")
    if "payload" not in data:
        raise ValueError("event field 'payload' is missing")
    return Event(
        aggregate_type=_require_str(data, "aggregate_type"),
        aggregate_id=new_id(_require_str(data, "aggregate_id")),
        event_type=_require_str(data, "event_type"),
        time_stamp=_parse_timestamp(_require_str(data, "time_stamp")),
        payload=data["payload"],
    )


def _is_datetime_field(field: dataclasses.Field) -> bool:
    annotation = field.type
    if annotation is datetime:
        return True
    return isinstance(annotation, str) and annotation.strip() in _DATETIME_ANNOTATIONS


def _coerce_datetimes(payload_type: type, data: dict) -> dict:
    datetime_fields = {
        field.name for field in dataclasses.fields(payload_type) if _is_datetime_field(field)
    }
    return {
        key: _parse_timestamp(value)
        if key in datetime_fields and isinstance(value, str)
        else value
        for key, value in data.items()
    }


def map_event_payload(event: Event, payload_type: type[T]) -> T:
    """Return the event payload as an instance of ``payload_type``."""
    payload = event.payload
    if isinstance(payload, payload_type):
        return payload
    data = json.loads(json.dumps(payload, default=_encode))
    if dataclasses.is_dataclass(payload_type):
        if not isinstance(data, dict):
            raise TypeError(f"cannot map {type(data).__name__} onto {payload_type.__name__}")
        names = {field.name for field in dataclasses.fields(payload_type) if field.init}
        known = {key: value for key, value in data.items() if key in names}
        return payload_type(**_coerce_datetimes(payload_type, known))
    if isinstance(data, dict):
        return payload_type(**data)
    return payload_type(data)