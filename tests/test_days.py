# tests/test_days.py

import calendar
from datetime import date, datetime, timedelta

import pytest

from app.calculator.days import compute_remaining_days_info


def test_mid_month_sunday():
    # 2026-10-18 is a Sunday; left: 18, 24, 25, 31 on weekends, 10 weekdays
    info = compute_remaining_days_info(date(2026, 10, 18))

    assert info.total == 14
    assert info.weekdays == 10
    assert info.weekends == 4
    assert info.is_today_weekend is True


def test_first_day_of_month():
    # September 2026 starts on a Tuesday
    info = compute_remaining_days_info(date(2026, 9, 1))

    assert info.total == 30
    assert info.weekdays == 22
    assert info.weekends == 8
    assert info.is_today_weekend is False


@pytest.mark.parametrize('last_day, is_weekend', [
    (date(2026, 10, 31), True),   # Saturday
    (date(2024, 12, 31), False),  # Tuesday
    (date(2024, 2, 29), False),   # Thursday, leap day
])
def test_last_day_of_month_has_one_day_left(last_day, is_weekend):
    info = compute_remaining_days_info(last_day)

    assert info.total == 1
    assert info.weekends == (1 if is_weekend else 0)
    assert info.weekdays == (0 if is_weekend else 1)
    assert info.is_today_weekend is is_weekend


def test_february_in_leap_year_has_29_days():
    info = compute_remaining_days_info(date(2024, 2, 1))

    assert info.total == 29
    assert info.weekdays == 21
    assert info.weekends == 8


def test_february_in_common_year_has_28_days():
    info = compute_remaining_days_info(date(2023, 2, 1))

    assert info.total == 28
    assert info.weekdays == 20
    assert info.weekends == 8


def test_century_year_is_not_leap_unless_divisible_by_400():
    assert compute_remaining_days_info(date(1900, 2, 1)).total == 28
    assert compute_remaining_days_info(date(2000, 2, 1)).total == 29


def test_today_weekend_flag_is_independent_of_the_tally():
    # Friday with a weekend still ahead in the month
    friday = compute_remaining_days_info(date(2026, 10, 23))
    saturday = compute_remaining_days_info(date(2026, 10, 24))

    assert friday.is_today_weekend is False
    assert friday.weekends > 0
    assert saturday.is_today_weekend is True
    assert saturday.weekdays > 0


def test_accepts_datetime():
    info = compute_remaining_days_info(datetime(2026, 10, 18, 23, 59))

    assert info.total == 14
    assert info.is_today_weekend is True


def test_counts_add_up_for_every_day_of_a_leap_year():
    day = date(2024, 1, 1)
    while day.year == 2024:
        info = compute_remaining_days_info(day)
        days_in_month = calendar.monthrange(day.year, day.month)[1]

        assert info.weekdays + info.weekends == info.total
        assert info.total == (days_in_month - day.day) + 1
        assert info.is_today_weekend == (day.weekday() >= 5)
        day += timedelta(days=1)
