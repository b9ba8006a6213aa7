"""Session service - reads, scoped edits and series end-date changes.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta

from practices.domain import (
    Capacity,
    EndDateChange,
    OperationScope,
    RecurrenceRule,
    RecurrenceRuleId,
    Session,
    SessionChanges,
    SessionId,
)
from practices.domain.conflicts import Candidate
from practices.domain.dates import days_in_month, policy_year_end
from practices.domain.errors import (
    InvalidRecurrenceRuleIdError,
    InvalidSessionIdError,
    PolicyCapExceededError,
    RecurrenceRuleNotFoundError,
    SessionNotFoundError,
    ValidationError,
)
from practices.domain.placement import (
    MonthCell,
    WeekPlacement,
    WeekWindow,
    month_layout,
    week_layout,
)
from practices.domain.recurrence import expand_recurrence
from practices.services.checks import ensure_no_conflicts, ensure_not_past
from practices.stores.interfaces import SessionStore

logger = logging.getLogger(__name__)


def _candidate(session: Session) -> Candidate:
    return Candidate(
        event_date=session.event_date,
        start_time=session.start_time,
        end_time=session.end_time,
    )


class SessionService:
    """Service for practice session operations."""

    def __init__(self, store: SessionStore) -> None:
        self._store = store

    def list_sessions(
        self,
        organizer_id: str | None = None,
        group_label: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Session]:
        """Return sessions matching the filters."""
        if date_from and date_to and date_from > date_to:
            raise ValidationError("Range start must not be after range end")
        return self._store.list_sessions(organizer_id, group_label, date_from, date_to)

    def get_session(self, session_id: str) -> Session:
        """Return a session by ID.

        Raises:
            InvalidSessionIdError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
        """
        session = self._store.get_session(self._parse_session_id(session_id))
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def update_session(
        self,
        session_id: str,
        organizer_id: str,
        changes: SessionChanges,
        scope: OperationScope,
        now: datetime,
    ) -> list[Session]:
        """Apply an edit to one occurrence or to its whole series.

        Moving a single occurrence to another date detaches it from its
        series, and a series left without sessions is deleted. A
        whole-series edit cannot change the date.

        Raises:
            InvalidSessionIdError, SessionNotFoundError: For a bad or foreign ID.
            ValidationError: If the edit breaks a session invariant.
            PastDatetimeError: If a single occurrence is moved into the past.
            ConflictDetectedError: If the new slots overlap other sessions.
        """
        session = self._owned_session(session_id, organizer_id)
        series_wide = (
            scope is OperationScope.WHOLE_SERIES and session.recurrence_rule_id is not None
        )

        if series_wide:
            if changes.event_date is not None:
                raise ValidationError("A whole-series edit cannot change the date")
            targets = self._store.get_sessions_for_rule(session.recurrence_rule_id)
        else:
            targets = [session]

        updated = [self._apply(target, changes, detach=not series_wide) for target in targets]

        if changes.moves_slot:
            candidates = [_candidate(s) for s in updated]
            if not series_wide:
                ensure_not_past(candidates, now)
            ensure_no_conflicts(
                self._store,
                session.organizer_id,
                session.group_label,
                candidates,
                ignore={target.id for target in targets},
            )

        self._store.update_sessions(updated)
        rule_id = session.recurrence_rule_id
        if rule_id and not series_wide and not self._store.get_sessions_for_rule(rule_id):
            self._store.delete_recurrence_rule(rule_id)
        logger.info(f"Updated {len(updated)} session(s) starting from {session.id} ({scope.value})")
        return updated

    def delete_session(self, session_id: str, organizer_id: str, scope: OperationScope) -> int:
        """Delete one occurrence or its whole series; return the number removed.

        A rule left without sessions is deleted too.
        """
        session = self._owned_session(session_id, organizer_id)
        rule_id = session.recurrence_rule_id

        if scope is OperationScope.WHOLE_SERIES and rule_id:
            ids = [s.id for s in self._store.get_sessions_for_rule(rule_id)]
            deleted = self._store.delete_sessions(ids)
            self._store.delete_recurrence_rule(rule_id)
        else:
            deleted = self._store.delete_sessions([session.id])
            if rule_id and not self._store.get_sessions_for_rule(rule_id):
                self._store.delete_recurrence_rule(rule_id)

        if deleted == 0:
            raise SessionNotFoundError(session_id)
        logger.info(f"Deleted {deleted} session(s) starting from {session.id} ({scope.value})")
        return deleted

    def update_rule_end_date(
        self, rule_id: str, organizer_id: str, new_end_date: date | None, now: datetime
    ) -> EndDateChange:
        """Move a series' end date, adding or removing occurrences to match.

        Raises:
            InvalidRecurrenceRuleIdError, RecurrenceRuleNotFoundError: For a bad or foreign ID.
            ValidationError: If the date is missing or before the series anchor.
            PolicyCapExceededError: If the date is beyond this year.
            PastDatetimeError, ConflictDetectedError: If new occurrences are rejected.
        """
        rule = self._owned_rule(rule_id, organizer_id)
        if new_end_date is None:
            raise ValidationError("End date is required")
        if new_end_date > policy_year_end(now):
            raise PolicyCapExceededError(now.year)
        if new_end_date < rule.anchor_date:
            raise ValidationError("End date must not be before the first occurrence")

        change = EndDateChange()
        if new_end_date > rule.end_date:
            change = EndDateChange(added=self._extend(rule, new_end_date, now))
        elif new_end_date < rule.end_date:
            change = EndDateChange(removed=self._store.delete_sessions_after(rule.id, new_end_date))

        self._store.update_recurrence_rule_end_date(rule.id, new_end_date)
        logger.info(
            f"Series {rule.id} now ends {new_end_date}: "
            f"{len(change.added)} added, {change.removed} removed"
        )
        return change

    def month_calendar(
        self,
        year: int,
        month: int,
        organizer_id: str | None = None,
        group_label: str | None = None,
    ) -> list[list[MonthCell[Session]]]:
        """Return the 6x7 month grid with the matching sessions bucketed by day."""
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        if not date.min.year <= year <= date.max.year:
            raise ValidationError(
                f"Year must be between {date.min.year} and {date.max.year}"
            )
        sessions = self._store.list_sessions(
            organizer_id,
            group_label,
            date(year, month, 1),
            date(year, month, days_in_month(year, month)),
        )
        return month_layout(year, month, sessions)

    def week_calendar(
        self,
        week_start: date,
        window: WeekWindow,
        organizer_id: str | None = None,
        group_label: str | None = None,
    ) -> list[WeekPlacement[Session]]:
        """Return grid placements for the sessions of the week starting `week_start`."""
        try:
            week_end = week_start + timedelta(days=6)
        except OverflowError as e:
            raise ValidationError("Week must end on or before 9999-12-31") from e
        sessions = self._store.list_sessions(organizer_id, group_label, week_start, week_end)
        return week_layout(week_start, sessions, window)

    def _extend(self, rule: RecurrenceRule, new_end_date: date, now: datetime) -> tuple[Session, ...]:
        existing = self._store.get_sessions_for_rule(rule.id)
        if not existing:
            return ()

        template = existing[-1]
        known = {s.event_date for s in existing}
        dates = [
            d
            for d in expand_recurrence(
                rule.anchor_date, new_end_date, rule.kind, rule.day_of_week, rule.nth_week
            )
            if d > rule.end_date and d not in known
        ]
        if not dates:
            return ()

        added = tuple(replace(template, id=SessionId.new(), event_date=d) for d in dates)
        candidates = [_candidate(s) for s in added]
        ensure_not_past(candidates, now)
        ensure_no_conflicts(self._store, template.organizer_id, template.group_label, candidates)
        self._store.insert_sessions(list(added))
        return added

    def _apply(self, session: Session, changes: SessionChanges, detach: bool) -> Session:
        updated = replace(
            session,
            event_date=changes.event_date or session.event_date,
            start_time=changes.start_time or session.start_time,
            end_time=changes.end_time or session.end_time,
            location=(
                changes.location.strip() if changes.location is not None else session.location
            ),
            content=changes.content if changes.content is not None else session.content,
            level=changes.level if changes.level is not None else session.level,
            conditions=(
                changes.conditions if changes.conditions is not None else session.conditions
            ),
            fee=changes.fee if changes.fee is not None else session.fee,
        )
        if changes.capacity is not None:
            try:
                updated = replace(updated, capacity=Capacity(changes.capacity))
            except ValueError as e:
                raise ValidationError(str(e)) from e
        if not updated.location:
            raise ValidationError("Location is required")
        if updated.start_time >= updated.end_time:
            raise ValidationError("Start time must be before end time")
        if detach and updated.event_date != session.event_date:
            updated = replace(updated, recurrence_rule_id=None)
        return updated

    def _owned_session(self, session_id: str, organizer_id: str) -> Session:
        session = self.get_session(session_id)
        if session.organizer_id != organizer_id:
            raise SessionNotFoundError(session_id)
        return session

    def _owned_rule(self, rule_id: str, organizer_id: str) -> RecurrenceRule:
        try:
            parsed = RecurrenceRuleId.from_string(rule_id)
        except ValueError as e:
            raise InvalidRecurrenceRuleIdError() from e
        rule = self._store.get_recurrence_rule(parsed)
        if rule is None or rule.organizer_id != organizer_id:
            raise RecurrenceRuleNotFoundError(rule_id)
        return rule

    @staticmethod
    def _parse_session_id(session_id: str) -> SessionId:
        try:
            return SessionId.from_string(session_id)
        except ValueError as e:
            raise InvalidSessionIdError() from e
