"""Double-booking detection for one organizer+group batch."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date

from practices.domain.dates import time_ranges_overlap
from practices.domain.models import ConflictRecord, Session
from practices.domain.value_objects import TimeOfDay


@dataclass(frozen=True)
class Candidate:
    """A (date, start, end) slot about to be created."""

    event_date: date
    start_time: TimeOfDay
    end_time: TimeOfDay


def find_conflicts(candidates: list[Candidate], existing: list[Session]) -> list[ConflictRecord]:
    """Return the existing sessions the candidates would overlap.

    `existing` must already be narrowed to the same organizer and group.
    Each candidate reports at most its first colliding session; records are
    de-duplicated by the existing session's date, start and end.
    """
    by_date: dict[date, list[Session]] = defaultdict(list)
    for session in existing:
        by_date[session.event_date].append(session)

    conflicts: dict[tuple[date, TimeOfDay, TimeOfDay], ConflictRecord] = {}
    for candidate in candidates:
        for session in by_date.get(candidate.event_date, []):
            if time_ranges_overlap(
                candidate.start_time, candidate.end_time, session.start_time, session.end_time
            ):
                key = (session.event_date, session.start_time, session.end_time)
                conflicts.setdefault(
                    key,
                    ConflictRecord(
                        event_date=session.event_date,
                        start_time=session.start_time,
                        end_time=session.end_time,
                        location=session.location,
                        group_label=session.group_label,
                    ),
                )
                break

    return list(conflicts.values())
