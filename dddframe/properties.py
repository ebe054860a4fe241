"""Loading of application properties from JSON files, optionally encrypted."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeVar

_log = logging.getLogger(__name__)

T = TypeVar("T")

Decryptor = Callable[[bytes], bytes]
"""Turns the contents of an encrypted properties file into plain JSON."""

decryptor: Decryptor | None = None
"""Decryptor applied to encrypted properties files; set it before loading one."""

_BASE_NAME = "properties"
_FILE_EXT = ".json"
_ENCRYPTED_EXT = ".enc"


class PropertiesError(Exception):
    """The properties file could not be found, read, decrypted or parsed."""


def properties(config_type: type[T], *args: str) -> T:
    """Load ``properties[.<profile>].json`` from the working directory.

    When the plain file is absent, ``properties[.<profile>].enc.json`` is read
    instead and passed through the module's ``decryptor``. The JSON object is
    mapped onto ``config_type``; keys match field names ignoring case and
    underscores, or a field's ``json`` metadata.
    """
    file_name = _file_name_for(args)
    path, encrypted = _resolve_path(file_name)
    data = _read_data(path, encrypted)
    try:
        raw = json.loads(data)
    except ValueError as error:
        _log.error("failed to parse config file %s: %s", path, error)
        raise PropertiesError(f"failed to parse config file {path}: {error}") from error
    return _build(config_type, raw)


def _file_name_for(profiles: tuple[str, ...]) -> str:
    if not profiles:
        return _BASE_NAME
    if len(profiles) > 1:
        raise PropertiesError("only one profile suffix is allowed")
    profile = profiles[0]
    if not profile:
        return _BASE_NAME
    return f"{_BASE_NAME}.{profile}"


def _resolve_path(file_name: str) -> tuple[Path, bool]:
    plain = Path(f"{file_name}{_FILE_EXT}")
    if plain.is_file():
        return plain, False
    _log.warning("failed to open config file %s", plain)
    encrypted = Path(f"{file_name}{_ENCRYPTED_EXT}{_FILE_EXT}")
    if encrypted.is_file():
        return encrypted, True
    _log.error("failed to open config file %s", encrypted)
    raise PropertiesError(f"failed to open config file {encrypted}")


def _read_data(path: Path, encrypted: bool) -> bytes:
    _log.info("starting server with config file %s", path)
    try:
        data = path.read_bytes()
    except OSError as error:
        _log.error("failed to read config file %s: %s", path, error)
        raise PropertiesError(f"failed to read config file {path}: {error}") from error
    if not encrypted:
        return data
    if decryptor is None:
        raise PropertiesError(f"config file {path} is encrypted and no decryptor is set")
    try:
        return decryptor(data)
    except Exception as error:  # noqa: BLE001 - any decryptor failure is reported the same way
        _log.error("failed to decrypt config file: %s", error)
        raise PropertiesError(f"failed to decrypt config file {path}: {error}") from error


def _normalize(key: str) -> str:
    return key.replace("_", "").lower()


def _build(config_type: type[T], raw: Any) -> T:
    if dataclasses.is_dataclass(config_type):
        if not isinstance(raw, Mapping):
            raise PropertiesError(f"cannot map {type(raw).__name__} onto {config_type.__name__}")
        return _from_mapping(config_type, raw)
    try:
        if isinstance(config_type, type) and issubclass(config_type, Mapping):
            return config_type(raw)
        return config_type(**raw)
    except TypeError as error:
        raise PropertiesError(f"cannot build {config_type.__name__}: {error}") from error


def _from_mapping(cls: type[T], data: Mapping[str, Any]) -> T:
    lookup = {_normalize(str(key)): value for key, value in data.items()}
    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        key = _normalize(field.metadata.get("json", field.name))
        if key not in lookup:
            continue
        value = lookup[key]
        hint = field.type
        if isinstance(hint, type) and dataclasses.is_dataclass(hint) and isinstance(value, Mapping):
            value = _from_mapping(hint, value)
        kwargs[field.name] = value
    try:
        return cls(**kwargs)
    except TypeError as error:
        raise PropertiesError(f"cannot build {cls.__name__}: {error}") from error