"""
Common Value Objects

Value objects used across multiple domains:
- TimeRange: Half-open interval of instants (booking start to end)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class TimeRange:
    """
    Time range value object

    Represents the interval from start (inclusive) to end (exclusive).
    Used for booking slots and therapist/room availability checks.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"End ({self.end}) must not be before start ({self.start})")

    @classmethod
    def from_duration(cls, start: datetime, minutes: int) -> 'TimeRange':
        """Build a range starting at ``start`` and lasting ``minutes``."""
        if minutes < 0:
            raise ValueError("Duration cannot be negative")
        return cls(start, start + timedelta(minutes=minutes))

    def overlaps_with(self, other: 'TimeRange') -> bool:
        """
        Check if this range overlaps with another

        end is exclusive, so back-to-back ranges don't overlap.

        Examples:
            - [10:00, 11:00) overlaps with [10:30, 11:30) -> True
            - [10:00, 11:00) overlaps with [11:00, 12:00) -> False (adjacent)
        """
        if not isinstance(other, TimeRange):
            raise TypeError("Can only check overlap with another TimeRange")

        # Overlap formula: start1 < end2 AND start2 < end1
        return self.start < other.end and other.start < self.end

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"TimeRange({self.start.isoformat()}, {self.end.isoformat()})"
