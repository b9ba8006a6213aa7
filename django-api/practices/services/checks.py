"""Read-only checks shared by every service that writes sessions."""

import logging
from collections.abc import Collection
from datetime import datetime

from practices.domain import SessionId
from practices.domain.conflicts import Candidate, find_conflicts
from practices.domain.errors import ConflictDetectedError, PastDatetimeError
from practices.stores.interfaces import SessionStore

logger = logging.getLogger(__name__)


def ensure_not_past(candidates: list[Candidate], now: datetime) -> None:
    """Reject the whole batch if any candidate starts before `now`."""
    for candidate in candidates:
        starts_at = datetime.combine(candidate.event_date, candidate.start_time.to_time())
        if starts_at < now:
            logger.warning(f"Rejected batch: occurrence at {starts_at} is in the past")
            raise PastDatetimeError(starts_at.isoformat(sep=" ", timespec="minutes"))


def ensure_no_conflicts(
    store: SessionStore,
    organizer_id: str,
    group_label: str,
    candidates: list[Candidate],
    ignore: Collection[SessionId] = (),
) -> None:
    """Reject the batch if it overlaps stored sessions of the same organizer+group.

    Sessions listed in `ignore` (the ones being edited) never count.
    """
    dates = {candidate.event_date for candidate in candidates}
    existing = [
        session
        for session in store.find_sessions(organizer_id, group_label, dates)
        if session.id not in ignore
    ]
    conflicts = find_conflicts(candidates, existing)
    if conflicts:
        logger.warning(
            f"Rejected batch for {group_label!r}: {len(conflicts)} conflicting session(s)"
        )
        raise ConflictDetectedError(conflicts)
