"""
Calendar-month arithmetic.

Every helper returns a new date; nothing is mutated in place.
"""

from __future__ import annotations

import calendar
from datetime import date


def add_months(d: date, months: int) -> date:
    """
    Shift a date by whole calendar months.

    The day is clamped to the length of the target month, so
    Jan 31 + 1 month is the last day of February.
    """
    month_index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_between(start: date, end: date) -> int:
    """Calendar-month difference between two dates, never less than 1."""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    return max(months, 1)


def age_in_months(birth_date: date, on: date) -> int:
    """Completed months of age on a given date (0 on the birth date)."""
    months = (on.year - birth_date.year) * 12
    months += on.month - birth_date.month
    if on.day < birth_date.day:
        months -= 1
    return max(0, months)


def trailing_window_start(reference: date, months: int = 3) -> date:
    """First day of the trailing window that ends on `reference`."""
    return add_months(reference, -months)
