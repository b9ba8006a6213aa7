"""Pytest configuration and shared fixtures."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime

import pytest
from rest_framework.test import APIClient

from practices.domain import (
    Capacity,
    RecurrenceRule,
    RecurrenceRuleId,
    Session,
    SessionId,
    TimeOfDay,
)
from practices.stores.interfaces import SessionStore


class InMemorySessionStore(SessionStore):
    """Dict-backed store used by service tests."""

    def __init__(self) -> None:
        self.sessions: dict[SessionId, Session] = {}
        self.rules: dict[RecurrenceRuleId, RecurrenceRule] = {}
        self.insert_calls = 0

    def find_sessions(self, organizer_id: str, group_label: str, dates: Iterable[date]) -> list[Session]:
        wanted = set(dates)
        return [
            s
            for s in self._ordered()
            if s.organizer_id == organizer_id
            and s.group_label == group_label
            and s.event_date in wanted
        ]

    def list_sessions(self, organizer_id=None, group_label=None, date_from=None, date_to=None):
        return [
            s
            for s in self._ordered()
            if (organizer_id is None or s.organizer_id == organizer_id)
            and (group_label is None or s.group_label == group_label)
            and (date_from is None or s.event_date >= date_from)
            and (date_to is None or s.event_date <= date_to)
        ]

    def get_session(self, session_id: SessionId) -> Session | None:
        return self.sessions.get(session_id)

    def get_sessions_for_rule(self, rule_id: RecurrenceRuleId) -> list[Session]:
        return [s for s in self._ordered() if s.recurrence_rule_id == rule_id]

    def insert_sessions(self, sessions: list[Session]) -> None:
        self.insert_calls += 1
        for session in sessions:
            self.sessions[session.id] = session

    def update_sessions(self, sessions: list[Session]) -> None:
        for session in sessions:
            self.sessions[session.id] = session

    def delete_sessions(self, session_ids: list[SessionId]) -> int:
        return sum(1 for sid in session_ids if self.sessions.pop(sid, None) is not None)

    def delete_sessions_after(self, rule_id: RecurrenceRuleId, end_date: date) -> int:
        doomed = [
            s.id for s in self.get_sessions_for_rule(rule_id) if s.event_date > end_date
        ]
        return self.delete_sessions(doomed)

    def get_recurrence_rule(self, rule_id: RecurrenceRuleId) -> RecurrenceRule | None:
        return self.rules.get(rule_id)

    def insert_recurrence_rule(self, rule: RecurrenceRule) -> RecurrenceRuleId:
        self.rules[rule.id] = rule
        return rule.id

    def update_recurrence_rule_end_date(self, rule_id: RecurrenceRuleId, end_date: date) -> None:
        self.rules[rule_id] = replace(self.rules[rule_id], end_date=end_date)

    def delete_recurrence_rule(self, rule_id: RecurrenceRuleId) -> None:
        self.rules.pop(rule_id, None)

    def _ordered(self) -> list[Session]:
        return sorted(self.sessions.values(), key=lambda s: (s.event_date, s.start_time))


def make_session(
    event_date: date,
    start: str = "14:00",
    end: str = "16:00",
    *,
    organizer_id: str = "organizer-1",
    group_label: str = "Tigers",
    location: str = "Main Gym",
    rule_id: RecurrenceRuleId | None = None,
) -> Session:
    return Session(
        id=SessionId.new(),
        organizer_id=organizer_id,
        group_label=group_label,
        event_date=event_date,
        start_time=TimeOfDay.from_string(start),
        end_time=TimeOfDay.from_string(end),
        location=location,
        capacity=Capacity(12),
        recurrence_rule_id=rule_id,
    )


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 1, 1, 8, 0)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def session_factory():
    return make_session
