"""Series builder - turns one organizer submission into concrete sessions.

Stages: validate, expand, check for conflicts, persist. Nothing is written
unless every earlier stage succeeds. The current time is always supplied by
the caller.

No atomicity is guaranteed against concurrent submissions for the same
organizer+group; two requests may both pass the conflict check.
"""

import logging
from dataclasses import replace
from datetime import date, datetime

from practices.domain import (
    Capacity,
    RecurrenceKind,
    RecurrenceRule,
    RecurrenceRuleId,
    SeriesRequest,
    SeriesResult,
    Session,
    SessionId,
)
from practices.domain.conflicts import Candidate
from practices.domain.dates import policy_year_end
from practices.domain.errors import (
    NoEligibleDatesError,
    PolicyCapExceededError,
    ValidationError,
)
from practices.domain.recurrence import derive_rule_parameters, expand_recurrence
from practices.services.checks import ensure_no_conflicts, ensure_not_past
from practices.stores.interfaces import SessionStore

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class SeriesBuilder:
    """Service for creating a single session or a recurring series."""

    def __init__(self, store: SessionStore) -> None:
        self._store = store

    def build(self, request: SeriesRequest, now: datetime) -> SeriesResult:
        """Create the sessions for a submission.

        Raises:
            ValidationError: If a required field is missing or malformed.
            PolicyCapExceededError: If the end date is beyond this year.
            NoEligibleDatesError: If the pattern yields no dates.
            PastDatetimeError: If any occurrence starts before `now`.
            ConflictDetectedError: If the batch overlaps existing sessions.
            PersistenceError: If the store fails.
        """
        capacity = self._validate(request, now)
        logger.debug(f"Validated submission for {request.group_label!r}")
        request = replace(
            request,
            group_label=request.group_label.strip(),
            location=request.location.strip(),
        )
        rule = self._rule_for(request)

        dates = self._expand(request, rule)
        logger.debug(f"Expanded submission for {request.group_label!r} into {len(dates)} date(s)")

        self._check(request, dates, now)
        logger.debug(f"No conflicts for {request.group_label!r}, persisting")

        sessions = tuple(
            self._session_for(request, event_date, capacity, rule) for event_date in dates
        )
        return self._persist(rule, sessions)

    def _validate(self, request: SeriesRequest, now: datetime) -> Capacity:
        if not request.group_label.strip():
            raise ValidationError("Group label is required")
        if not request.location.strip():
            raise ValidationError("Location is required")
        try:
            capacity = Capacity(request.capacity)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        if request.start_time >= request.end_time:
            raise ValidationError("Start time must be before end time")

        if request.recurrence_kind is not RecurrenceKind.NONE:
            if request.recurrence_end_date is None:
                raise ValidationError("End date is required for a recurring series")
            if request.recurrence_end_date > policy_year_end(now):
                raise PolicyCapExceededError(now.year)
        return capacity

    def _rule_for(self, request: SeriesRequest) -> RecurrenceRule | None:
        if request.recurrence_kind is RecurrenceKind.NONE:
            return None
        day_of_week, nth_week = derive_rule_parameters(
            request.anchor_date, request.recurrence_kind
        )
        return RecurrenceRule(
            id=RecurrenceRuleId.new(),
            organizer_id=request.organizer_id,
            kind=request.recurrence_kind,
            day_of_week=day_of_week,
            nth_week=nth_week,
            anchor_date=request.anchor_date,
            end_date=request.recurrence_end_date,
        )

    def _expand(self, request: SeriesRequest, rule: RecurrenceRule | None) -> list[date]:
        if rule is None:
            return [request.anchor_date]

        dates = expand_recurrence(
            rule.anchor_date, rule.end_date, rule.kind, rule.day_of_week, rule.nth_week
        )
        if not dates:
            raise NoEligibleDatesError()
        return dates

    def _check(self, request: SeriesRequest, dates: list[date], now: datetime) -> None:
        candidates = [
            Candidate(event_date=d, start_time=request.start_time, end_time=request.end_time)
            for d in dates
        ]
        ensure_not_past(candidates, now)
        ensure_no_conflicts(self._store, request.organizer_id, request.group_label, candidates)

    def _session_for(
        self,
        request: SeriesRequest,
        event_date: date,
        capacity: Capacity,
        rule: RecurrenceRule | None,
    ) -> Session:
        return Session(
            id=SessionId.new(),
            organizer_id=request.organizer_id,
            group_label=request.group_label,
            event_date=event_date,
            start_time=request.start_time,
            end_time=request.end_time,
            location=request.location,
            capacity=capacity,
            content=_clean(request.content),
            level=_clean(request.level),
            conditions=_clean(request.conditions),
            fee=_clean(request.fee),
            recurrence_rule_id=rule.id if rule else None,
        )

    def _persist(self, rule: RecurrenceRule | None, sessions: tuple[Session, ...]) -> SeriesResult:
        rule_id = self._store.insert_recurrence_rule(rule) if rule else None
        self._store.insert_sessions(list(sessions))
        logger.info(
            f"Created {len(sessions)} session(s) for {sessions[0].group_label!r}"
            + (f" in series {rule_id}" if rule_id else "")
        )
        return SeriesResult(sessions=sessions, recurrence_rule_id=rule_id)
