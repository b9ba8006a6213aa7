from practices.domain.models import (
    ConflictRecord,
    EndDateChange,
    OperationScope,
    RecurrenceKind,
    RecurrenceRule,
    SeriesRequest,
    SeriesResult,
    Session,
    SessionChanges,
)
from practices.domain.value_objects import Capacity, RecurrenceRuleId, SessionId, TimeOfDay

__all__ = [
    "ConflictRecord",
    "EndDateChange",
    "OperationScope",
    "RecurrenceKind",
    "RecurrenceRule",
    "SeriesRequest",
    "SeriesResult",
    "Session",
    "SessionChanges",
    "Capacity",
    "RecurrenceRuleId",
    "SessionId",
    "TimeOfDay",
]
