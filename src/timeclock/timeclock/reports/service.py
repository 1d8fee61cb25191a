from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import IncompleteMonthError
from ..ledger.aggregator import LedgerAggregator
from ..ledger.formatting import format_clock_time, format_date_label, format_minutes
from ..punches.model import DayAggregate
from ..punches.repository import PunchRepository

REPORT_FIELDS = [
    "date",
    "clock_in",
    "clock_out",
    "break_time",
    "work_time",
    "edited",
    "comment",
    "warning",
]


@dataclass(frozen=True)
class ReportData:
    year: int
    month: int
    rows: list[dict]
    summary: dict


class MonthlyReportService:
    """Builds the monthly timesheet: one row per work session."""

    def __init__(self, punches: PunchRepository, *, aggregator: LedgerAggregator | None = None):
        self._punches = punches
        self._aggregator = aggregator or LedgerAggregator()

    def build_monthly_report(self, *, user_id: int, year: int, month: int) -> ReportData:
        cal = self._aggregator.calendar
        start, end = cal.month_range(year, month)
        punches = self._punches.find_in_range(user_id, start, end)

        stats = self._aggregator.monthly_stats(punches)
        if stats.incomplete_days:
            raise IncompleteMonthError(stats.incomplete_days)

        rows: list[dict] = []
        for day in self._aggregator.day_aggregates(punches):
            if not day.work_sessions:
                continue
            rows.extend(self._day_rows(day))

        summary = {
            "working_days": stats.working_days,
            "total_working_hours": format_minutes(stats.total_working_minutes),
        }
        return ReportData(year=int(year), month=int(month), rows=rows, summary=summary)

    def _day_rows(self, day: DayAggregate) -> list[dict]:
        cal = self._aggregator.calendar
        warning = "Unpaired break punch ignored" if day.unpaired_break else ""
        out: list[dict] = []

        for i, s in enumerate(day.work_sessions):
            first = i == 0
            out.append(
                {
                    "date": format_date_label(day.date_key) if first else "",
                    "clock_in": format_clock_time(s.start.timestamp, cal),
                    "clock_out": format_clock_time(s.end.timestamp, cal),
                    # the day's break total is shown once, on its first session
                    "break_time": format_minutes(day.break_minutes) if first else "-",
                    "work_time": format_minutes(s.duration_minutes),
                    "edited": "Edited" if s.is_edited else "",
                    "comment": s.comment or "",
                    "warning": warning if first else "",
                }
            )
        return out
