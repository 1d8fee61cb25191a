"""Conversions between aware UTC instants and MySQL ``DATETIME(3)`` values."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ..common.datetime_utils import ensure_utc


def to_db_datetime(value: datetime) -> datetime:
    return ensure_utc(value).replace(tzinfo=None)


def from_db_datetime(value: Any) -> datetime:
    # mysql-connector gives naive datetimes; the pure-python protocol may give str
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if not isinstance(value, datetime):
        raise TypeError(f"Unsupported DATETIME value: {value!r}")
    return ensure_utc(value)
