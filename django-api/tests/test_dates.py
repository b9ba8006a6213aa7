"""Unit tests for date and time primitives.

Run with: pytest tests/test_dates.py -v
"""

from datetime import date, datetime

import pytest

from practices.domain import TimeOfDay
from practices.domain.dates import (
    day_of_week,
    days_in_month,
    nth_week_of,
    nth_weekday_of_month,
    policy_year_end,
    time_ranges_overlap,
    week_start_for,
)


class TestCalendarHelpers:
    """Tests for day-of-week and month length helpers."""

    def test_day_of_week_is_monday_based(self):
        """2024-01-01 was a Monday."""
        assert day_of_week(date(2024, 1, 1)) == 0
        assert day_of_week(date(2024, 1, 7)) == 6

    @pytest.mark.parametrize(
        "year,month,expected",
        [(2024, 2, 29), (2023, 2, 28), (2024, 4, 30), (2024, 12, 31), (1900, 2, 28)],
    )
    def test_days_in_month(self, year, month, expected):
        """Month lengths account for leap years."""
        assert days_in_month(year, month) == expected

    @pytest.mark.parametrize(
        "day,expected", [(1, 1), (7, 1), (8, 2), (28, 4), (29, 5), (31, 5)]
    )
    def test_nth_week_of(self, day, expected):
        """The nth occurrence is ceil(day / 7), capped at 5."""
        assert nth_week_of(date(2024, 1, day)) == expected

    def test_week_start_for_returns_monday(self):
        """Any day maps to the Monday of its week."""
        assert week_start_for(date(2024, 1, 10)) == date(2024, 1, 8)
        assert week_start_for(date(2024, 1, 14)) == date(2024, 1, 8)
        assert week_start_for(date(2024, 1, 8)) == date(2024, 1, 8)

    def test_policy_year_end(self):
        """The cap is Dec 31 of the current year."""
        assert policy_year_end(datetime(2024, 6, 1, 12, 0)) == date(2024, 12, 31)


class TestNthWeekdayOfMonth:
    """Tests for nth_weekday_of_month."""

    def test_fifth_monday_exists_in_january_2024(self):
        """January 2024 has five Mondays."""
        assert nth_weekday_of_month(2024, 1, 0, 5) == date(2024, 1, 29)

    def test_fifth_monday_missing_in_february_2024(self):
        """February 2024 has only four Mondays."""
        assert nth_weekday_of_month(2024, 2, 0, 5) is None

    def test_first_weekday_on_day_one(self):
        """The first Thursday of February 2024 is the 1st."""
        assert nth_weekday_of_month(2024, 2, 3, 1) == date(2024, 2, 1)

    def test_result_is_always_the_nth_matching_weekday(self):
        """Every non-None result has the right weekday and position."""
        for year in (2023, 2024, 2025):
            for month in range(1, 13):
                for weekday in range(7):
                    for n in range(1, 6):
                        result = nth_weekday_of_month(year, month, weekday, n)
                        if result is None:
                            assert n >= 5
                            continue
                        assert (result.year, result.month) == (year, month)
                        assert result.weekday() == weekday
                        assert (result.day - 1) // 7 == n - 1


class TestTimeRangesOverlap:
    """Tests for half-open time range overlap."""

    def test_overlapping_ranges(self):
        """Ranges that cross overlap."""
        assert time_ranges_overlap("14:00", "16:00", "15:00", "17:00")

    def test_touching_ranges_do_not_overlap(self):
        """A range ending when another starts is not an overlap."""
        assert not time_ranges_overlap("14:00", "16:00", "16:00", "18:00")
        assert not time_ranges_overlap("08:00", "10:00", "06:00", "08:00")

    def test_containment_overlaps(self):
        """A range inside another overlaps it."""
        assert time_ranges_overlap("09:00", "12:00", "10:00", "10:30")

    def test_accepts_time_of_day(self):
        """TimeOfDay values work the same as strings."""
        assert time_ranges_overlap(TimeOfDay(9, 0), TimeOfDay(10, 0), "09:30", "11:00")

    @pytest.mark.parametrize(
        "a,b",
        [
            (("09:00", "10:00"), ("09:30", "11:00")),
            (("09:00", "10:00"), ("10:00", "11:00")),
            (("09:00", "10:00"), ("11:00", "12:00")),
            (("09:00", "17:00"), ("12:00", "12:30")),
            (("00:00", "23:59"), ("23:58", "23:59")),
        ],
    )
    def test_overlap_is_symmetric(self, a, b):
        """Swapping the ranges never changes the answer."""
        assert time_ranges_overlap(*a, *b) == time_ranges_overlap(*b, *a)
