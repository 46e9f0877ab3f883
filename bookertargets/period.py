"""
Period Math - Calendar-derived values for a target period.

Usage:
    days = days_in_month(2024, 6)        # 30
    working = working_days(days)         # 21
    daily = daily_target(700000, working)

Working days are an approximation (5 of every 7 days), not a holiday-aware
business calendar.
"""

import calendar
from datetime import date

from bookertargets.exceptions import DivisionByZeroError, InvalidPeriodError


def validate_period(year: int, month: int) -> None:
    """Raise InvalidPeriodError unless (year, month) is a calendar month."""
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise InvalidPeriodError(year, month)


def days_in_month(year: int, month: int) -> int:
    """Get the calendar day count for a month."""
    validate_period(year, month)
    return calendar.monthrange(year, month)[1]


def working_days(days: int) -> int:
    """Approximate working days in a month of `days` days."""
    return days * 5 // 7


def daily_target(target_amount: float, working_day_count: int) -> float:
    """Spread a target amount evenly over the working days."""
    if working_day_count == 0:
        raise DivisionByZeroError()
    return target_amount / working_day_count


def period_progress(year: int, month: int, as_of: date) -> tuple[int, int]:
    """
    Get (days_elapsed, days_remaining) for a period as of a date.

    Dates before the period count as zero elapsed days, dates after it as
    the whole month.
    """
    total = days_in_month(year, month)
    if (as_of.year, as_of.month) < (year, month):
        elapsed = 0
    elif (as_of.year, as_of.month) > (year, month):
        elapsed = total
    else:
        elapsed = as_of.day
    return elapsed, max(0, total - elapsed)
