from __future__ import annotations

from datetime import date, datetime

from .boundaries import DEFAULT_CALENDAR, BusinessCalendar

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def format_minutes(total: int) -> str:
    """Minutes -> "H:MM" (hours unpadded, no width limit).

    Negative totals keep the sign on the hour part: -125 -> "-2:05".
    """
    total = int(total)
    sign = "-" if total < 0 else ""
    hours, minutes = divmod(abs(total), 60)
    return f"{sign}{hours}:{minutes:02d}"


def format_clock_time(instant: datetime, calendar: BusinessCalendar = DEFAULT_CALENDAR) -> str:
    return calendar.to_reference(instant).strftime("%H:%M")


def format_datetime(instant: datetime, calendar: BusinessCalendar = DEFAULT_CALENDAR) -> str:
    return calendar.to_reference(instant).strftime("%Y/%m/%d %H:%M:%S")


def format_date_label(date_key: str) -> str:
    """'2025-01-07' -> 'Tue 2025-01-07'."""
    d = date.fromisoformat(date_key)
    return f"{_WEEKDAYS[d.weekday()]} {date_key}"
