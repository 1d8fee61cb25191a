from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from ..common.datetime_utils import ensure_utc
from ..common.validators import require_month
from ..core.constants import DEFAULT_DAY_START_HOUR, DEFAULT_UTC_OFFSET_HOURS
from ..core.exceptions import InvalidArgumentError

ONE_DAY = timedelta(days=1)
ONE_MILLISECOND = timedelta(milliseconds=1)


@dataclass(frozen=True)
class BusinessCalendar:
    """Business day / month boundaries in a fixed reference timezone.

    A business day runs from ``day_start_hour``:00:00.000 reference time to
    the following day's ``day_start_hour - 1``:59:59.999. A business month
    starts at ``day_start_hour`` on the 1st. The host's local timezone is never
    consulted: all civil arithmetic goes through a fixed UTC offset, and every
    returned instant is an aware UTC datetime.
    """

    utc_offset: timedelta = timedelta(hours=DEFAULT_UTC_OFFSET_HOURS)
    day_start_hour: int = DEFAULT_DAY_START_HOUR

    def __post_init__(self):
        if not 0 <= int(self.day_start_hour) <= 23:
            raise ValueError(f"day_start_hour out of range: {self.day_start_hour}")

    @property
    def tz(self) -> timezone:
        return timezone(self.utc_offset)

    def to_reference(self, instant: datetime) -> datetime:
        """Instant expressed in reference civil time."""
        return ensure_utc(instant).astimezone(self.tz)

    def day_start(self, instant: datetime) -> datetime:
        local = self.to_reference(instant)
        start = local.replace(hour=self.day_start_hour, minute=0, second=0, microsecond=0)
        if local.hour < self.day_start_hour:
            start -= ONE_DAY
        return start.astimezone(timezone.utc)

    def day_end(self, instant: datetime) -> datetime:
        return self.day_start(instant) + ONE_DAY - ONE_MILLISECOND

    def business_date(self, instant: datetime) -> date:
        """Reference civil date of the business day ``instant`` belongs to."""
        return self.to_reference(self.day_start(instant)).date()

    def date_key(self, instant: datetime) -> str:
        return self.business_date(instant).isoformat()

    def month_start(self, year: int, month: int) -> datetime:
        month = require_month(month)
        try:
            local = datetime(int(year), month, 1, self.day_start_hour, tzinfo=self.tz)
            return local.astimezone(timezone.utc)
        except (OverflowError, ValueError):
            # December 9999 ends in year 10000, past datetime.MAXYEAR
            raise InvalidArgumentError(f"Year out of range: {year}")

    def month_end(self, year: int, month: int) -> datetime:
        month = require_month(month)
        if month == 12:
            return self.month_start(int(year) + 1, 1) - ONE_MILLISECOND
        return self.month_start(year, month + 1) - ONE_MILLISECOND

    def month_range(self, year: int, month: int) -> tuple[datetime, datetime]:
        return self.month_start(year, month), self.month_end(year, month)


DEFAULT_CALENDAR = BusinessCalendar()
