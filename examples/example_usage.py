"""Example: use the service layer directly (no Flask).

Prints the current status and this month's totals for user 1.
"""

import importlib

from config import get_settings_module

from src.timeclock.timeclock.common.datetime_utils import now_utc
from src.timeclock.timeclock.container import build_container
from src.timeclock.timeclock.ledger.formatting import format_minutes


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    status = container.punch_service.current_status(user_id=1)
    print(status.work_state.value, status.break_state.value)

    today = container.aggregator.calendar.business_date(now_utc())
    month = container.punch_service.monthly_records(1, year=today.year, month=today.month)
    print(format_minutes(month.stats.total_working_minutes), month.stats.working_days, month.stats.incomplete_days)


if __name__ == "__main__":
    main()
