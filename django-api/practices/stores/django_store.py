"""Django ORM implementation of the SessionStore."""

import logging
from collections.abc import Iterable
from datetime import date

from django.db import DatabaseError, transaction

from practices import models as orm
from practices.domain import (
    Capacity,
    RecurrenceKind,
    RecurrenceRule,
    RecurrenceRuleId,
    Session,
    SessionId,
    TimeOfDay,
)
from practices.domain.errors import PersistenceError
from practices.stores.interfaces import SessionStore

logger = logging.getLogger(__name__)


def _to_session(row: orm.PracticeSession) -> Session:
    return Session(
        id=SessionId(row.id),
        organizer_id=row.organizer_id,
        group_label=row.group_label,
        event_date=row.event_date,
        start_time=TimeOfDay.from_time(row.start_time),
        end_time=TimeOfDay.from_time(row.end_time),
        location=row.location,
        capacity=Capacity(row.capacity),
        content=row.content,
        level=row.level,
        conditions=row.conditions,
        fee=row.fee,
        recurrence_rule_id=(
            RecurrenceRuleId(row.recurrence_rule_id) if row.recurrence_rule_id else None
        ),
    )


def _session_fields(session: Session) -> dict:
    return {
        "organizer_id": session.organizer_id,
        "group_label": session.group_label,
        "event_date": session.event_date,
        "start_time": session.start_time.to_time(),
        "end_time": session.end_time.to_time(),
        "location": session.location,
        "capacity": session.capacity.value,
        "content": session.content,
        "level": session.level,
        "conditions": session.conditions,
        "fee": session.fee,
        "recurrence_rule_id": (
            session.recurrence_rule_id.value if session.recurrence_rule_id else None
        ),
    }


def _to_rule(row: orm.RecurrenceRule) -> RecurrenceRule:
    return RecurrenceRule(
        id=RecurrenceRuleId(row.id),
        organizer_id=row.organizer_id,
        kind=RecurrenceKind(row.kind),
        day_of_week=row.day_of_week,
        nth_week=row.nth_week,
        anchor_date=row.anchor_date,
        end_date=row.end_date,
    )


class DjangoSessionStore(SessionStore):
    """Relational session store using Django ORM."""

    def find_sessions(
        self, organizer_id: str, group_label: str, dates: Iterable[date]
    ) -> list[Session]:
        rows = orm.PracticeSession.objects.filter(
            organizer_id=organizer_id,
            group_label=group_label,
            event_date__in=list(dates),
        )
        return self._read(rows)

    def list_sessions(
        self,
        organizer_id: str | None = None,
        group_label: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Session]:
        rows = orm.PracticeSession.objects.all()
        if organizer_id is not None:
            rows = rows.filter(organizer_id=organizer_id)
        if group_label is not None:
            rows = rows.filter(group_label=group_label)
        if date_from is not None:
            rows = rows.filter(event_date__gte=date_from)
        if date_to is not None:
            rows = rows.filter(event_date__lte=date_to)
        return self._read(rows.order_by("event_date", "start_time"))

    def get_session(self, session_id: SessionId) -> Session | None:
        rows = self._read(orm.PracticeSession.objects.filter(id=session_id.value))
        return rows[0] if rows else None

    def get_sessions_for_rule(self, rule_id: RecurrenceRuleId) -> list[Session]:
        rows = orm.PracticeSession.objects.filter(recurrence_rule_id=rule_id.value)
        return self._read(rows.order_by("event_date", "start_time"))

    def insert_sessions(self, sessions: list[Session]) -> None:
        rows = [
            orm.PracticeSession(id=session.id.value, **_session_fields(session))
            for session in sessions
        ]
        # Saved row by row so post_save handlers see every insert.
        try:
            with transaction.atomic():
                for row in rows:
                    row.save(force_insert=True)
        except DatabaseError as e:
            logger.error(f"Failed to insert {len(rows)} sessions: {e}")
            raise PersistenceError("Could not save sessions") from e

    def update_sessions(self, sessions: list[Session]) -> None:
        try:
            with transaction.atomic():
                for session in sessions:
                    fields = _session_fields(session)
                    row = orm.PracticeSession(id=session.id.value, **fields)
                    # Existing row; without this the default pk makes save() INSERT.
                    row._state.adding = False
                    row.save(update_fields=list(fields))
        except DatabaseError as e:
            logger.error(f"Failed to update {len(sessions)} sessions: {e}")
            raise PersistenceError("Could not update sessions") from e

    def delete_sessions(self, session_ids: list[SessionId]) -> int:
        try:
            deleted, _ = orm.PracticeSession.objects.filter(
                id__in=[session_id.value for session_id in session_ids]
            ).delete()
        except DatabaseError as e:
            logger.error(f"Failed to delete sessions: {e}")
            raise PersistenceError("Could not delete sessions") from e
        return deleted

    def delete_sessions_after(self, rule_id: RecurrenceRuleId, end_date: date) -> int:
        try:
            deleted, _ = orm.PracticeSession.objects.filter(
                recurrence_rule_id=rule_id.value, event_date__gt=end_date
            ).delete()
        except DatabaseError as e:
            logger.error(f"Failed to trim series {rule_id}: {e}")
            raise PersistenceError("Could not delete sessions") from e
        return deleted

    def get_recurrence_rule(self, rule_id: RecurrenceRuleId) -> RecurrenceRule | None:
        try:
            row = orm.RecurrenceRule.objects.filter(id=rule_id.value).first()
        except DatabaseError as e:
            logger.error(f"Failed to read recurrence rule {rule_id}: {e}")
            raise PersistenceError() from e
        return _to_rule(row) if row else None

    def insert_recurrence_rule(self, rule: RecurrenceRule) -> RecurrenceRuleId:
        try:
            row = orm.RecurrenceRule.objects.create(
                id=rule.id.value,
                organizer_id=rule.organizer_id,
                kind=rule.kind.value,
                day_of_week=rule.day_of_week,
                nth_week=rule.nth_week,
                anchor_date=rule.anchor_date,
                end_date=rule.end_date,
            )
        except DatabaseError as e:
            logger.error(f"Failed to insert recurrence rule: {e}")
            raise PersistenceError("Could not save recurrence rule") from e
        return RecurrenceRuleId(row.id)

    def update_recurrence_rule_end_date(self, rule_id: RecurrenceRuleId, end_date: date) -> None:
        try:
            orm.RecurrenceRule.objects.filter(id=rule_id.value).update(end_date=end_date)
        except DatabaseError as e:
            logger.error(f"Failed to update end date of rule {rule_id}: {e}")
            raise PersistenceError("Could not update recurrence rule") from e

    def delete_recurrence_rule(self, rule_id: RecurrenceRuleId) -> None:
        try:
            orm.RecurrenceRule.objects.filter(id=rule_id.value).delete()
        except DatabaseError as e:
            logger.error(f"Failed to delete recurrence rule {rule_id}: {e}")
            raise PersistenceError("Could not delete recurrence rule") from e

    def _read(self, rows) -> list[Session]:
        try:
            return [_to_session(row) for row in rows]
        except DatabaseError as e:
            logger.error(f"Failed to read sessions: {e}")
            raise PersistenceError() from e
