"""Recurrence expansion: rule parameters in, concrete occurrence dates out."""

from collections.abc import Iterator
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from practices.domain.dates import (
    day_of_week as weekday_of,
    days_in_month,
    nth_week_of,
    nth_weekday_of_month,
)
from practices.domain.models import RecurrenceKind


def derive_rule_parameters(anchor: date, kind: RecurrenceKind) -> tuple[int | None, int | None]:
    """Return (day_of_week, nth_week) for a rule anchored on `anchor`.

    Only the parameters the kind actually uses are set.
    """
    if kind is RecurrenceKind.WEEKLY:
        return weekday_of(anchor), None
    if kind is RecurrenceKind.MONTHLY_NTH_WEEKDAY:
        return weekday_of(anchor), nth_week_of(anchor)
    return None, None


def expand_recurrence(
    anchor: date,
    end: date,
    kind: RecurrenceKind,
    day_of_week: int | None = None,
    nth_week: int | None = None,
) -> list[date]:
    """Expand a rule into its sorted occurrence dates within [anchor, end].

    Missing day_of_week / nth_week are derived from the anchor.
    """
    if anchor > end:
        return _anchor_after_end(anchor)

    if day_of_week is None:
        day_of_week = weekday_of(anchor)
    if nth_week is None:
        nth_week = nth_week_of(anchor)

    if kind is RecurrenceKind.WEEKLY:
        dates = _expand_weekly(anchor, end)
    elif kind is RecurrenceKind.MONTHLY_FIXED_DATE:
        dates = _expand_monthly_fixed_date(anchor, end)
    elif kind is RecurrenceKind.MONTHLY_NTH_WEEKDAY:
        dates = _expand_monthly_nth_weekday(anchor, end, day_of_week, nth_week)
    else:
        raise ValueError(f"Cannot expand recurrence kind {kind.value!r}")

    return sorted(set(dates))


def _anchor_after_end(anchor: date) -> list[date]:
    # An end date before the anchor still yields the anchor itself.
    return [anchor]


def _months(anchor: date, end: date) -> Iterator[tuple[int, int]]:
    """(year, month) pairs from the anchor's month through the end's month."""
    cursor = anchor.replace(day=1)
    last = end.replace(day=1)
    while cursor <= last:
        yield cursor.year, cursor.month
        cursor += relativedelta(months=1)


def _expand_weekly(anchor: date, end: date) -> list[date]:
    dates = []
    current = anchor
    while current <= end:
        dates.append(current)
        current += timedelta(weeks=1)
    return dates


def _expand_monthly_fixed_date(anchor: date, end: date) -> list[date]:
    dates = []
    for year, month in _months(anchor, end):
        day = min(anchor.day, days_in_month(year, month))
        candidate = date(year, month, day)
        if anchor <= candidate <= end:
            dates.append(candidate)
    return dates


def _expand_monthly_nth_weekday(
    anchor: date, end: date, day_of_week: int, nth_week: int
) -> list[date]:
    dates = []
    for year, month in _months(anchor, end):
        candidate = nth_weekday_of_month(year, month, day_of_week, nth_week)
        if candidate is not None and anchor <= candidate <= end:
            dates.append(candidate)
    return dates
