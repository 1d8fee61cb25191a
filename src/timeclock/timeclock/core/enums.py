from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Record stream a punch belongs to (stored in the DB)."""

    WORK = "work"
    BREAK = "break"


class PunchSource(str, Enum):
    """Where a punch was submitted from."""

    WEB = "web"
    EXTERNAL = "external"


class PunchType(str, Enum):
    """Semantic type derived from a punch's position within its day."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"

    @property
    def is_start(self) -> bool:
        return self in (PunchType.CLOCK_IN, PunchType.BREAK_START)


class WorkState(str, Enum):
    CLOCKED_IN = "clocked_in"
    CLOCKED_OUT = "clocked_out"


class BreakState(str, Enum):
    ON_BREAK = "on_break"
    NOT_ON_BREAK = "not_on_break"
