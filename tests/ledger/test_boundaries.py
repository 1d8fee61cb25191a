from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import JST, jst
from src.timeclock.timeclock.core.exceptions import InvalidArgumentError
from src.timeclock.timeclock.ledger.boundaries import BusinessCalendar

CAL = BusinessCalendar()

SAMPLE_INSTANTS = [
    jst(2025, 1, 15, 0, 0),
    jst(2025, 1, 15, 2, 0),
    jst(2025, 1, 15, 5, 59, 59, 999),
    jst(2025, 1, 15, 6, 0),
    jst(2025, 1, 15, 9, 30),
    jst(2025, 1, 15, 23, 59, 59),
    jst(2024, 2, 29, 4, 0),
    jst(2024, 12, 31, 23, 0),
    jst(2025, 1, 1, 3, 0),
]


def test_day_start_after_six_is_same_date():
    assert CAL.day_start(jst(2025, 1, 15, 9, 0)) == jst(2025, 1, 15, 6, 0)


def test_day_start_before_six_belongs_to_previous_date():
    assert CAL.day_start(jst(2025, 1, 15, 3, 0)) == jst(2025, 1, 14, 6, 0)


def test_day_start_boundary_instants():
    assert CAL.day_start(jst(2025, 1, 15, 6, 0)) == jst(2025, 1, 15, 6, 0)
    assert CAL.day_start(jst(2025, 1, 15, 5, 59, 59, 999)) == jst(2025, 1, 14, 6, 0)


def test_day_end_is_next_morning_minus_one_millisecond():
    assert CAL.day_end(jst(2025, 1, 15, 12, 0)) == jst(2025, 1, 16, 5, 59, 59, 999)


@pytest.mark.parametrize("t", SAMPLE_INSTANTS)
def test_instant_lies_within_its_business_day(t):
    start, end = CAL.day_start(t), CAL.day_end(t)
    assert start <= t <= end
    assert end - start == timedelta(milliseconds=86399999)


@pytest.mark.parametrize("t", SAMPLE_INSTANTS)
def test_business_date_steps_back_only_before_six(t):
    civil = t.astimezone(JST)
    start_civil = CAL.day_start(t).astimezone(JST)
    if civil.hour < 6:
        assert start_civil.date() == civil.date() - timedelta(days=1)
    else:
        assert start_civil.date() == civil.date()


def test_date_key_of_two_am_is_previous_reference_date():
    # 2025-03-10 02:00 JST is 2025-03-09 17:00 UTC; both views point to the 9th
    assert CAL.date_key(jst(2025, 3, 10, 2, 0)) == "2025-03-09"
    assert CAL.date_key(jst(2025, 3, 10, 6, 0)) == "2025-03-10"


def test_date_key_uses_reference_date_not_utc_date():
    # 08:00 JST on the 10th is 23:00 UTC on the 9th
    assert CAL.date_key(jst(2025, 3, 10, 8, 0)) == "2025-03-10"


def test_month_start_is_first_day_at_six_reference_time():
    assert CAL.month_start(2025, 1) == jst(2025, 1, 1, 6, 0)
    assert CAL.month_start(2025, 1).tzinfo == timezone.utc


@pytest.mark.parametrize("month", range(1, 13))
def test_month_end_plus_one_ms_is_next_month_start(month):
    next_year, next_month = (2025, 1) if month == 12 else (2024, month + 1)
    assert CAL.month_end(2024, month) + timedelta(milliseconds=1) == CAL.month_start(next_year, next_month)


def test_month_end_rolls_year_in_december():
    assert CAL.month_end(2024, 12) == jst(2025, 1, 1, 5, 59, 59, 999)


@pytest.mark.parametrize("month", [0, 13, -1])
def test_invalid_month_is_rejected(month):
    with pytest.raises(InvalidArgumentError):
        CAL.month_start(2025, month)
    with pytest.raises(InvalidArgumentError):
        CAL.month_end(2025, month)


def test_naive_datetimes_are_read_as_utc():
    naive = datetime(2025, 1, 15, 0, 0)  # 09:00 JST
    assert CAL.day_start(naive) == jst(2025, 1, 15, 6, 0)


def test_custom_offset_and_start_hour():
    cal = BusinessCalendar(utc_offset=timedelta(0), day_start_hour=4)
    t = datetime(2025, 6, 1, 3, 0, tzinfo=timezone.utc)
    assert cal.day_start(t) == datetime(2025, 5, 31, 4, 0, tzinfo=timezone.utc)
    assert cal.month_start(2025, 6) == datetime(2025, 6, 1, 4, 0, tzinfo=timezone.utc)


def test_result_does_not_depend_on_input_timezone():
    t = jst(2025, 1, 15, 3, 0)
    same_instant_elsewhere = t.astimezone(timezone(timedelta(hours=-5)))
    assert CAL.day_start(same_instant_elsewhere) == CAL.day_start(t)


def test_invalid_day_start_hour():
    with pytest.raises(ValueError):
        BusinessCalendar(day_start_hour=24)


def test_month_past_datetime_range_is_invalid_argument():
    with pytest.raises(InvalidArgumentError):
        CAL.month_range(9999, 12)
    assert CAL.month_start(9999, 11) < CAL.month_end(9999, 11)


@pytest.mark.parametrize("month", ["x", None, "1.5"])
def test_non_numeric_month_is_invalid_argument(month):
    with pytest.raises(InvalidArgumentError):
        CAL.month_start(2025, month)
