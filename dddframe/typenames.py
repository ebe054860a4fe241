"""Stable names for message types."""

from __future__ import annotations

from typing import Any


def type_name(obj: Any) -> str:
    """Return ``module.QualifiedName`` for an instance or a class."""
    cls = obj if isinstance(obj, type) else type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"