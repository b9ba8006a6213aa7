"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import time
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class SessionId:
    """Unique identifier for a practice Session."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RecurrenceRuleId:
    """Unique identifier for a RecurrenceRule."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time with minute resolution, rendered as "HH:MM"."""

    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError("Hour must be between 0 and 23")
        if not 0 <= self.minute <= 59:
            raise ValueError("Minute must be between 0 and 59")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse "HH:MM" (also "H:MM" and "HH:MM:SS", seconds dropped)."""
        parts = value.strip().split(":")
        if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid time format: {value!r}")
        return cls(hour=int(parts[0]), minute=int(parts[1]))

    @classmethod
    def from_time(cls, value: time) -> Self:
        return cls(hour=value.hour, minute=value.minute)

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class Capacity:
    """Maximum number of participants; at least one."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Capacity must be at least 1")
