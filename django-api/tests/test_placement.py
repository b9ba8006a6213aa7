"""Unit tests for calendar placement.

Run with: pytest tests/test_placement.py -v
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pytest

from practices.domain.placement import WeekWindow, month_layout, week_layout


@dataclass(frozen=True)
class Block:
    title: str
    starts_at: datetime
    ends_at: datetime


def block(start: datetime, minutes: int, title: str = "practice") -> Block:
    return Block(title, start, start + timedelta(minutes=minutes))


class TestMonthLayout:
    """Tests for month_layout."""

    @pytest.mark.parametrize("year", [2021, 2023, 2024, 2025])
    def test_grid_is_six_by_seven_and_covers_every_day(self, year):
        """Every month renders 6x7 with each day in exactly one cell."""
        for month in range(1, 13):
            grid = month_layout(year, month, [])

            assert len(grid) == 6
            assert all(len(row) == 7 for row in grid)
            days = [cell.day for row in grid for cell in row if cell.day is not None]
            first = date(year, month, 1)
            expected = [first + timedelta(days=i) for i in range(len(days))]
            assert days == expected
            assert days[-1].month == month
            assert (days[-1] + timedelta(days=1)).month != month

    def test_grid_is_monday_first(self):
        """February 2024 starts on a Thursday, the 4th column."""
        grid = month_layout(2024, 2, [])

        assert [cell.day for cell in grid[0][:3]] == [None, None, None]
        assert grid[0][3].day == date(2024, 2, 1)

    def test_short_month_gets_trailing_empty_rows(self):
        """February 2021 fits four rows; two empty rows pad it to six."""
        grid = month_layout(2021, 2, [])

        assert grid[0][0].day == date(2021, 2, 1)
        assert grid[3][6].day == date(2021, 2, 28)
        assert all(cell.day is None for row in grid[4:] for cell in row)

    def test_events_are_bucketed_by_start_date(self):
        """Cells hold every event starting that day, other months are dropped."""
        a = block(datetime(2024, 2, 10, 9, 0), 60, "a")
        b = block(datetime(2024, 2, 10, 18, 0), 90, "b")
        c = block(datetime(2024, 2, 12, 7, 0), 30, "c")
        outside = block(datetime(2024, 3, 1, 9, 0), 60, "outside")

        grid = month_layout(2024, 2, [a, b, c, outside])
        cells = {cell.day: cell.events for row in grid for cell in row if cell.day}

        assert cells[date(2024, 2, 10)] == (a, b)
        assert cells[date(2024, 2, 12)] == (c,)
        assert sum(len(events) for events in cells.values()) == 3


class TestWeekWindow:
    """Tests for WeekWindow validation."""

    def test_default_window(self):
        """06:00-22:00 in 30-minute slots gives 32 rows."""
        assert WeekWindow().slot_count == 32

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"start_hour": 10, "end_hour": 9},
            {"start_hour": -1},
            {"end_hour": 25},
            {"slot_minutes": 0},
            {"slot_minutes": 7},
        ],
    )
    def test_rejects_invalid_windows(self, kwargs):
        with pytest.raises(ValueError):
            WeekWindow(**kwargs)


class TestWeekLayout:
    """Tests for week_layout."""

    week_start = date(2024, 1, 8)

    def test_places_event_on_day_and_slot(self):
        """Wednesday 09:00 for 90 minutes is day 2, slot 6, 3 slots tall."""
        [placement] = week_layout(self.week_start, [block(datetime(2024, 1, 10, 9, 0), 90)])

        assert (placement.day_index, placement.slot_index, placement.duration_slots) == (2, 6, 3)

    def test_short_event_takes_one_slot(self):
        """A 20-minute event still occupies one slot."""
        [placement] = week_layout(self.week_start, [block(datetime(2024, 1, 8, 6, 0), 20)])

        assert placement.duration_slots == 1

    def test_duration_rounds_half_up(self):
        """75 minutes in 30-minute slots rounds 2.5 up to 3."""
        [placement] = week_layout(self.week_start, [block(datetime(2024, 1, 8, 10, 0), 75)])

        assert placement.duration_slots == 3

    def test_mid_slot_start_floors(self):
        """A 09:45 start falls in the 09:30 slot."""
        [placement] = week_layout(self.week_start, [block(datetime(2024, 1, 8, 9, 45), 60)])

        assert placement.slot_index == 7

    def test_events_outside_hours_are_excluded(self):
        """Starts before 06:00 or at/after 22:00 are not placed."""
        events = [
            block(datetime(2024, 1, 9, 5, 30), 60),
            block(datetime(2024, 1, 9, 22, 0), 60),
            block(datetime(2024, 1, 9, 21, 30), 60),
        ]

        placements = week_layout(self.week_start, events)

        assert [p.slot_index for p in placements] == [31]

    def test_events_outside_week_are_excluded(self):
        """Only the seven days from the week start are placed."""
        events = [
            block(datetime(2024, 1, 7, 10, 0), 60),
            block(datetime(2024, 1, 14, 10, 0), 60),
            block(datetime(2024, 1, 15, 10, 0), 60),
        ]

        assert [p.day_index for p in week_layout(self.week_start, events)] == [6]

    def test_custom_window(self):
        """Slot index follows the configured start hour and slot size."""
        window = WeekWindow(start_hour=8, end_hour=20, slot_minutes=15)

        [placement] = week_layout(
            self.week_start, [block(datetime(2024, 1, 8, 9, 30), 45)], window
        )

        assert (placement.slot_index, placement.duration_slots) == (6, 3)

    def test_placements_sorted_by_day_then_slot(self):
        """Output order is stable regardless of input order."""
        events = [
            block(datetime(2024, 1, 12, 8, 0), 60, "fri"),
            block(datetime(2024, 1, 8, 18, 0), 60, "mon-evening"),
            block(datetime(2024, 1, 8, 7, 0), 60, "mon-morning"),
        ]

        titles = [p.event.title for p in week_layout(self.week_start, events)]

        assert titles == ["mon-morning", "mon-evening", "fri"]
