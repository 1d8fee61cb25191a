from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from ..core.enums import BreakState, PunchKind, PunchSource, PunchType, WorkState


@dataclass(frozen=True)
class Punch:
    """Domain entity: one timestamped attendance event.

    The engine never mutates a punch; classification produces a derived view.
    """

    punch_id: int
    user_id: int
    timestamp: datetime
    kind: PunchKind
    source: PunchSource = PunchSource.WEB
    is_edited: bool = False
    comment: Optional[str] = None


@dataclass(frozen=True)
class ClassifiedPunch:
    """A punch plus its positional type. Derived, never persisted."""

    punch: Punch
    type: PunchType

    @property
    def punch_id(self) -> int:
        return self.punch.punch_id

    @property
    def timestamp(self) -> datetime:
        return self.punch.timestamp

    @property
    def kind(self) -> PunchKind:
        return self.punch.kind


@dataclass(frozen=True)
class Session:
    """Two consecutive same-kind punches (clock_in/clock_out or break_start/break_end)."""

    start: ClassifiedPunch
    end: ClassifiedPunch

    @property
    def duration_minutes(self) -> int:
        # floor division on timedelta truncates seconds and below
        return (self.end.timestamp - self.start.timestamp) // timedelta(minutes=1)

    @property
    def is_edited(self) -> bool:
        return self.start.punch.is_edited or self.end.punch.is_edited

    @property
    def comment(self) -> Optional[str]:
        return self.start.punch.comment or self.end.punch.comment


@dataclass(frozen=True)
class DayAggregate:
    date_key: str
    work_sessions: list[Session] = field(default_factory=list)
    break_sessions: list[Session] = field(default_factory=list)
    net_work_minutes: int = 0
    complete: bool = True
    # trailing break_start with no break_end; reported, never counted
    unpaired_break: Optional[ClassifiedPunch] = None

    @property
    def break_minutes(self) -> int:
        return sum(s.duration_minutes for s in self.break_sessions)


@dataclass(frozen=True)
class MonthAggregate:
    total_working_minutes: int
    working_days: int
    incomplete_days: list[str]


@dataclass(frozen=True)
class LedgerStatus:
    work_state: WorkState
    break_state: BreakState
    last_event: Optional[ClassifiedPunch] = None
