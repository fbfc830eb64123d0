"""Field extraction helpers for raw ``describe_*`` records.

Every helper is fail-fast: a missing or unrepresentable value raises a
``RemoteParseError`` subclass naming the field.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from ..errors import MissingFieldError, OutOfRangeError, RemoteParseError
from ..size import Size, SizeError

SECONDS_PER_DAY = 24 * 60 * 60


def map_field(record: Mapping[str, Any], field_name: str) -> Any:
    if not isinstance(record, Mapping):
        raise RemoteParseError(f"record is not an object: {type(record).__name__}")
    value = record.get(field_name)
    if value is None:
        raise MissingFieldError(field_name)
    return value


def map_string_field(record: Mapping[str, Any], field_name: str) -> str:
    value = map_field(record, field_name)
    if not isinstance(value, str):
        raise OutOfRangeError(field_name, value, "expected a string")
    return value


def map_unix_epoch_millis(record: Mapping[str, Any], field_name: str) -> datetime:
    """Convert epoch milliseconds into an aware UTC ``datetime``."""
    millis = map_field(record, field_name)
    if isinstance(millis, bool) or not isinstance(millis, int):
        raise OutOfRangeError(field_name, millis, "expected epoch milliseconds")
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise OutOfRangeError(field_name, millis, str(exc)) from exc


def map_size(record: Mapping[str, Any], field_name: str) -> Size:
    value = map_field(record, field_name)
    try:
        return Size.from_bytes(value)
    except SizeError as exc:
        raise OutOfRangeError(field_name, value, str(exc)) from exc


def duration_days(days: int) -> timedelta:
    return timedelta(seconds=days * SECONDS_PER_DAY)
