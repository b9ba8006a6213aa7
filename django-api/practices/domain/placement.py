"""Calendar placement: grid coordinates for month and week views.

Works on any object exposing naive `starts_at` / `ends_at` datetimes and
never mutates its input.
"""

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Generic, Protocol, TypeVar

from practices.domain.dates import days_in_month

MONTH_ROWS = 6
DAYS_PER_WEEK = 7


class TimeBounded(Protocol):
    @property
    def starts_at(self) -> datetime: ...

    @property
    def ends_at(self) -> datetime: ...


E = TypeVar("E", bound=TimeBounded)


@dataclass(frozen=True)
class MonthCell(Generic[E]):
    """One day of the month grid; padding cells have day=None."""

    day: date | None
    events: tuple[E, ...] = ()


@dataclass(frozen=True)
class WeekWindow:
    """Visible hours of the week view and their slot granularity."""

    start_hour: int = 6
    end_hour: int = 22
    slot_minutes: int = 30

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError("Week window hours must satisfy 0 <= start < end <= 24")
        if self.slot_minutes <= 0 or (self.end_hour - self.start_hour) * 60 % self.slot_minutes:
            raise ValueError("Slot minutes must evenly divide the window")

    @property
    def slot_count(self) -> int:
        return (self.end_hour - self.start_hour) * 60 // self.slot_minutes


@dataclass(frozen=True)
class WeekPlacement(Generic[E]):
    """Grid coordinates of one event in the week view."""

    event: E
    day_index: int
    slot_index: int
    duration_slots: int


def month_layout(year: int, month: int, events: list[E]) -> list[list[MonthCell[E]]]:
    """Lay a month out as 6 Monday-first rows of 7 cells.

    Events are bucketed by the calendar date they start on; events outside
    the month are left out.
    """
    buckets: dict[date, list[E]] = defaultdict(list)
    for event in events:
        buckets[event.starts_at.date()].append(event)

    first_column = date(year, month, 1).weekday()
    cells: list[MonthCell[E]] = [MonthCell(day=None)] * first_column
    for day_number in range(1, days_in_month(year, month) + 1):
        day = date(year, month, day_number)
        cells.append(MonthCell(day=day, events=tuple(buckets.get(day, ()))))
    cells.extend([MonthCell(day=None)] * (MONTH_ROWS * DAYS_PER_WEEK - len(cells)))

    return [
        cells[row * DAYS_PER_WEEK:(row + 1) * DAYS_PER_WEEK]
        for row in range(MONTH_ROWS)
    ]


def week_layout(
    week_start: date, events: list[E], window: WeekWindow | None = None
) -> list[WeekPlacement[E]]:
    """Place events on a 7-day x time-slot grid starting at `week_start`.

    Events on other days, or starting outside the window's hours, are not
    placed. Every placed event spans at least one slot.
    """
    window = window or WeekWindow()
    placements = []
    for event in events:
        day_index = (event.starts_at.date() - week_start).days
        if not 0 <= day_index < DAYS_PER_WEEK:
            continue

        start_minutes = event.starts_at.hour * 60 + event.starts_at.minute
        offset = start_minutes - window.start_hour * 60
        if offset < 0 or start_minutes >= window.end_hour * 60:
            continue

        duration_minutes = (event.ends_at - event.starts_at).total_seconds() / 60
        placements.append(
            WeekPlacement(
                event=event,
                day_index=day_index,
                slot_index=offset // window.slot_minutes,
                duration_slots=max(1, _round_half_up(duration_minutes / window.slot_minutes)),
            )
        )

    placements.sort(key=lambda p: (p.day_index, p.slot_index))
    return placements


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
