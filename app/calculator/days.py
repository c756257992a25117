# ==============================================================================
# app/calculator/days.py
# ------------------------------------------------------------------------------
# Works out how many days are left in the current month and how they split
# between weekdays and weekend days.
# ==============================================================================

import calendar
import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class RemainingDaysInfo:
    """Remaining days of a month, counted from a reference date inclusive."""
    total: int
    weekdays: int
    weekends: int
    is_today_weekend: bool


def _is_weekend(day):
    # Monday is 0, Saturday 5, Sunday 6
    return day.weekday() >= 5


def compute_remaining_days_info(reference_date):
    """
    Counts the days from reference_date through the last day of its month.

    Args:
        reference_date (date): The day treated as "today". A datetime is
            accepted too; only its date part is used.

    Returns:
        RemainingDaysInfo: total, weekday and weekend counts plus whether the
        reference date itself falls on a weekend.
    """
    year, month = reference_date.year, reference_date.month
    last_day = calendar.monthrange(year, month)[1]
    current_day = reference_date.day

    weekdays = 0
    weekends = 0
    for day_number in range(current_day, last_day + 1):
        if _is_weekend(reference_date.replace(day=day_number)):
            weekends += 1
        else:
            weekdays += 1

    info = RemainingDaysInfo(
        total=(last_day - current_day) + 1,
        weekdays=weekdays,
        weekends=weekends,
        is_today_weekend=_is_weekend(reference_date),
    )
    logging.debug(f"Remaining days from {reference_date:%Y-%m-%d}: {info}")
    return info
