from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import BreakState, PunchKind, PunchType, WorkState
from ..punches.model import ClassifiedPunch, DayAggregate, LedgerStatus, MonthAggregate, Punch, Session
from .boundaries import DEFAULT_CALENDAR, BusinessCalendar
from .classifier import chronological, classify


def pair_sessions(classified: Sequence[ClassifiedPunch]) -> tuple[list[Session], Optional[ClassifiedPunch]]:
    """Pair same-kind punches (0,1), (2,3), ...; return sessions and the unpaired tail."""
    sessions = [Session(start=classified[i], end=classified[i + 1]) for i in range(0, len(classified) - 1, 2)]
    dangling = classified[-1] if len(classified) % 2 else None
    return sessions, dangling


class LedgerAggregator:
    """Derives status, per-day aggregates and monthly totals from raw punches.

    Everything is recomputed from the punches passed in; no state is kept
    between calls.
    """

    def __init__(self, calendar: BusinessCalendar | None = None):
        self._calendar = calendar or DEFAULT_CALENDAR

    @property
    def calendar(self) -> BusinessCalendar:
        return self._calendar

    def group_by_day(self, punches: Iterable[Punch]) -> dict[str, list[Punch]]:
        """Partition by business day (a 03:00 punch goes to the previous date)."""
        grouped: dict[str, list[Punch]] = {}
        for p in chronological(punches):
            grouped.setdefault(self._calendar.date_key(p.timestamp), []).append(p)
        return grouped

    def classify_by_day(self, punches: Iterable[Punch]) -> list[ClassifiedPunch]:
        out: list[ClassifiedPunch] = []
        for day_punches in self.group_by_day(punches).values():
            out.extend(classify(day_punches))
        return out

    def status_of(self, punches_today: Iterable[Punch]) -> LedgerStatus:
        classified = classify(punches_today)
        if not classified:
            return LedgerStatus(work_state=WorkState.CLOCKED_OUT, break_state=BreakState.NOT_ON_BREAK)

        last_work = next((c for c in reversed(classified) if c.kind == PunchKind.WORK), None)
        last_break = next((c for c in reversed(classified) if c.kind == PunchKind.BREAK), None)

        work_state = WorkState.CLOCKED_IN if last_work and last_work.type == PunchType.CLOCK_IN else WorkState.CLOCKED_OUT
        break_state = (
            BreakState.ON_BREAK if last_break and last_break.type == PunchType.BREAK_START else BreakState.NOT_ON_BREAK
        )
        return LedgerStatus(work_state=work_state, break_state=break_state, last_event=classified[-1])

    def aggregate_day(self, date_key: str, punches: Iterable[Punch]) -> DayAggregate:
        classified = classify(punches)
        work = [c for c in classified if c.kind == PunchKind.WORK]
        breaks = [c for c in classified if c.kind == PunchKind.BREAK]

        work_sessions, _ = pair_sessions(work)
        break_sessions, unpaired_break = pair_sessions(breaks)

        net = sum(s.duration_minutes for s in work_sessions) - sum(s.duration_minutes for s in break_sessions)
        return DayAggregate(
            date_key=date_key,
            work_sessions=work_sessions,
            break_sessions=break_sessions,
            net_work_minutes=net,
            complete=len(work) % 2 == 0,
            unpaired_break=unpaired_break,
        )

    def day_aggregates(self, punches: Iterable[Punch]) -> list[DayAggregate]:
        days = [self.aggregate_day(key, day_punches) for key, day_punches in self.group_by_day(punches).items()]
        days.sort(key=lambda d: d.date_key)
        return days

    def monthly_stats(self, punches_in_month: Iterable[Punch]) -> MonthAggregate:
        """Roll a month of punches up into totals.

        Incomplete days (odd work count) are listed and excluded entirely,
        breaks included. Days without work punches count for nothing and are
        not flagged. The caller filters punches to the month range.
        """
        total = 0
        working_days = 0
        incomplete: list[str] = []

        for key, day_punches in self.group_by_day(punches_in_month).items():
            day = self.aggregate_day(key, day_punches)
            if not day.complete:
                incomplete.append(key)
                continue
            if not day.work_sessions:
                continue
            total += day.net_work_minutes
            working_days += 1

        return MonthAggregate(total_working_minutes=total, working_days=working_days, incomplete_days=incomplete)
