from __future__ import annotations

from datetime import datetime, timezone
from typing import Union

from ..core.exceptions import InvalidArgumentError


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime.

    Naive values are treated as UTC, which is how punches are stored.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_instant(value: Union[str, int, float]) -> datetime:
    """Parse an ISO-8601 timestamp (``Z`` suffix accepted) into UTC.

    Numbers are read as epoch milliseconds, as JavaScript clients send them.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise InvalidArgumentError(f"Invalid timestamp: {value!r}")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Invalid timestamp: {value!r}")

    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(v))
    except ValueError:
        raise InvalidArgumentError(f"Invalid timestamp: {value!r}")


def now_utc() -> datetime:
    """Current instant.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)
