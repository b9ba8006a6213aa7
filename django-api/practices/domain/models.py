"""Domain models representing persisted state and transient results.

These are pure domain objects with no API input rules.
Django ORM models are in practices/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from practices.domain.value_objects import (
    Capacity,
    RecurrenceRuleId,
    SessionId,
    TimeOfDay,
)


class RecurrenceKind(Enum):
    """How a submission repeats."""

    NONE = "none"
    WEEKLY = "weekly"
    MONTHLY_FIXED_DATE = "monthly_fixed_date"
    MONTHLY_NTH_WEEKDAY = "monthly_nth_weekday"


class OperationScope(Enum):
    """Target of an edit or delete on a series member."""

    SINGLE = "single"
    WHOLE_SERIES = "whole_series"


@dataclass(frozen=True)
class RecurrenceRule:
    """Generating rule shared by every session of a series.

    day_of_week uses Monday = 0. end_date is the only mutable attribute.
    """

    id: RecurrenceRuleId
    organizer_id: str
    kind: RecurrenceKind
    day_of_week: int | None
    nth_week: int | None
    anchor_date: date
    end_date: date


@dataclass(frozen=True)
class Session:
    """Domain representation of one bookable practice occurrence."""

    id: SessionId
    organizer_id: str
    group_label: str
    event_date: date
    start_time: TimeOfDay
    end_time: TimeOfDay
    location: str
    capacity: Capacity
    content: str | None = None
    level: str | None = None
    conditions: str | None = None
    fee: str | None = None
    recurrence_rule_id: RecurrenceRuleId | None = None

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.event_date, self.start_time.to_time())

    @property
    def ends_at(self) -> datetime:
        return datetime.combine(self.event_date, self.end_time.to_time())


@dataclass(frozen=True)
class ConflictRecord:
    """An existing session that a submission would double-book."""

    event_date: date
    start_time: TimeOfDay
    end_time: TimeOfDay
    location: str
    group_label: str


@dataclass(frozen=True)
class SeriesRequest:
    """One organizer submission: a single session or a recurring series."""

    organizer_id: str
    group_label: str
    anchor_date: date
    start_time: TimeOfDay
    end_time: TimeOfDay
    location: str
    capacity: int
    recurrence_kind: RecurrenceKind = RecurrenceKind.NONE
    recurrence_end_date: date | None = None
    content: str | None = None
    level: str | None = None
    conditions: str | None = None
    fee: str | None = None


@dataclass(frozen=True)
class SeriesResult:
    """Outcome of a successful submission."""

    sessions: tuple[Session, ...]
    recurrence_rule_id: RecurrenceRuleId | None = None

    @property
    def created_count(self) -> int:
        return len(self.sessions)


@dataclass(frozen=True)
class SessionChanges:
    """Partial edit of a session; None means unchanged."""

    event_date: date | None = None
    start_time: TimeOfDay | None = None
    end_time: TimeOfDay | None = None
    location: str | None = None
    capacity: int | None = None
    content: str | None = None
    level: str | None = None
    conditions: str | None = None
    fee: str | None = None

    @property
    def moves_slot(self) -> bool:
        return any(
            value is not None
            for value in (self.event_date, self.start_time, self.end_time)
        )


@dataclass(frozen=True)
class EndDateChange:
    """Sessions added and removed by a recurrence end-date edit."""

    added: tuple[Session, ...] = field(default=())
    removed: int = 0
