"""Domain error codes for the practices module."""

from dataclasses import dataclass
from enum import Enum

from practices.domain.models import ConflictRecord


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    POLICY_CAP_EXCEEDED = "POLICY_CAP_EXCEEDED"
    PAST_DATETIME = "PAST_DATETIME"
    NO_ELIGIBLE_DATES = "NO_ELIGIBLE_DATES"
    CONFLICT_DETECTED = "CONFLICT_DETECTED"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    RECURRENCE_RULE_NOT_FOUND = "RECURRENCE_RULE_NOT_FOUND"
    INVALID_SESSION_ID = "INVALID_SESSION_ID"
    INVALID_RECURRENCE_RULE_ID = "INVALID_RECURRENCE_RULE_ID"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)


class PolicyCapExceededError(ValidationError):
    """Raised when a recurrence end date is beyond the current year."""

    def __init__(self, year: int) -> None:
        DomainError.__init__(
            self,
            code=ErrorCode.POLICY_CAP_EXCEEDED,
            message=f"Recurrence end date must be on or before {year}-12-31",
        )


class PastDatetimeError(DomainError):
    """Raised when any occurrence would start before now."""

    def __init__(self, first_past: str) -> None:
        super().__init__(
            code=ErrorCode.PAST_DATETIME,
            message=f"Session start {first_past} is in the past",
        )


class NoEligibleDatesError(DomainError):
    """Raised when a recurrence pattern yields no dates in range."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_ELIGIBLE_DATES,
            message="No dates match the recurrence pattern",
        )


class ConflictDetectedError(DomainError):
    """Raised when a submission would double-book existing sessions."""

    def __init__(self, conflicts: list[ConflictRecord]) -> None:
        super().__init__(
            code=ErrorCode.CONFLICT_DETECTED,
            message=f"{len(conflicts)} existing session(s) overlap this submission",
        )
        self.conflicts = tuple(conflicts)


class PersistenceError(DomainError):
    """Raised when the store fails to read or write."""

    def __init__(self, message: str = "Storage operation failed") -> None:
        super().__init__(code=ErrorCode.PERSISTENCE_ERROR, message=message)


class SessionNotFoundError(DomainError):
    """Raised when a session is not found."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
        )
        self.session_id = session_id


class RecurrenceRuleNotFoundError(DomainError):
    """Raised when a recurrence rule is not found."""

    def __init__(self, rule_id: str) -> None:
        super().__init__(
            code=ErrorCode.RECURRENCE_RULE_NOT_FOUND,
            message="Recurrence rule not found",
        )
        self.rule_id = rule_id


class InvalidSessionIdError(DomainError):
    """Raised when a session ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SESSION_ID,
            message="Invalid session ID format",
        )


class InvalidRecurrenceRuleIdError(DomainError):
    """Raised when a recurrence rule ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RECURRENCE_RULE_ID,
            message="Invalid recurrence rule ID format",
        )
