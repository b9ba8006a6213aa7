"""Pure date and time helpers shared by expansion, conflict checks and layout."""

import calendar
import math
from datetime import date, datetime, timedelta

from practices.domain.value_objects import TimeOfDay


def day_of_week(value: date) -> int:
    """Weekday of a date, Monday = 0 through Sunday = 6."""
    return value.weekday()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date | None:
    """Return the n-th `weekday` of the month, or None if the month has fewer.

    >>> nth_weekday_of_month(2024, 1, 0, 5)
    datetime.date(2024, 1, 29)
    >>> nth_weekday_of_month(2024, 2, 0, 5) is None
    True
    """
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    day = 1 + offset + (n - 1) * 7
    if day > days_in_month(year, month):
        return None
    return date(year, month, day)


def nth_week_of(value: date) -> int:
    """Which occurrence of its weekday a date is within its month (1..5)."""
    return min(5, max(1, math.ceil(value.day / 7)))


def to_minutes(value: TimeOfDay | str) -> int:
    if isinstance(value, str):
        value = TimeOfDay.from_string(value)
    return value.minutes


def time_ranges_overlap(
    start_a: TimeOfDay | str,
    end_a: TimeOfDay | str,
    start_b: TimeOfDay | str,
    end_b: TimeOfDay | str,
) -> bool:
    """Half-open overlap: ranges that only touch at a boundary do not overlap."""
    return to_minutes(start_a) < to_minutes(end_b) and to_minutes(end_a) > to_minutes(start_b)


def policy_year_end(now: datetime | date) -> date:
    """Latest allowed recurrence end date: Dec 31 of the current year."""
    return date(now.year, 12, 31)


def week_start_for(value: date) -> date:
    """Monday of the week containing `value`."""
    return value - timedelta(days=value.weekday())
