"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Failures surface as
PersistenceError; stores never retry.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date

from practices.domain import RecurrenceRule, RecurrenceRuleId, Session, SessionId


class SessionStore(ABC):
    """Interface for practice session and recurrence rule persistence."""

    @abstractmethod
    def find_sessions(
        self, organizer_id: str, group_label: str, dates: Iterable[date]
    ) -> list[Session]:
        """Return the organizer+group sessions held on any of `dates`."""
        ...

    @abstractmethod
    def list_sessions(
        self,
        organizer_id: str | None = None,
        group_label: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Session]:
        """Return sessions matching the filters, ordered by date then start time."""
        ...

    @abstractmethod
    def get_session(self, session_id: SessionId) -> Session | None:
        """Return a session by ID, or None if not found."""
        ...

    @abstractmethod
    def get_sessions_for_rule(self, rule_id: RecurrenceRuleId) -> list[Session]:
        """Return every session of a series, ordered by date ascending."""
        ...

    @abstractmethod
    def insert_sessions(self, sessions: list[Session]) -> None:
        """Insert a batch of new sessions."""
        ...

    @abstractmethod
    def update_sessions(self, sessions: list[Session]) -> None:
        """Overwrite existing sessions, matched by ID."""
        ...

    @abstractmethod
    def delete_sessions(self, session_ids: list[SessionId]) -> int:
        """Delete sessions by ID and return how many were removed."""
        ...

    @abstractmethod
    def delete_sessions_after(self, rule_id: RecurrenceRuleId, end_date: date) -> int:
        """Delete a series' sessions dated after `end_date`; return the count."""
        ...

    @abstractmethod
    def get_recurrence_rule(self, rule_id: RecurrenceRuleId) -> RecurrenceRule | None:
        """Return a recurrence rule by ID, or None if not found."""
        ...

    @abstractmethod
    def insert_recurrence_rule(self, rule: RecurrenceRule) -> RecurrenceRuleId:
        """Insert a recurrence rule and return its ID."""
        ...

    @abstractmethod
    def update_recurrence_rule_end_date(self, rule_id: RecurrenceRuleId, end_date: date) -> None:
        """Store a new end date for a rule."""
        ...

    @abstractmethod
    def delete_recurrence_rule(self, rule_id: RecurrenceRuleId) -> None:
        """Delete a recurrence rule."""
        ...
