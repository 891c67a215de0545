"""
Domain models for minute-based time ranges, booked events and meeting requests.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Union

from .exceptions import (
    AttendeeSetConflictError,
    InvalidDurationError,
    InvalidRangeError,
)


DAY_LENGTH = 24 * 60
START_OF_DAY = 0
# Last minute of the day, for building ranges with an inclusive end.
END_OF_DAY = DAY_LENGTH - 1


def get_time_in_minutes(hour: int, minute: int) -> int:
    """Convert a wall-clock time into minutes since the start of the day."""
    return hour * 60 + minute


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True, order=True)
class TimeRange:
    """
    Represents an immutable half-open range ``[start, end)`` of minutes within a day.

    Ranges compare and sort by ``(start, end)``.

    Invariant: start is not negative and end is never before start.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise InvalidRangeError(f"Start {self.start} must not be negative")
        if self.end < self.start:
            raise InvalidRangeError(f"End {self.end} must not be before start {self.start}")

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        """Create a range that begins at ``start`` and lasts ``duration`` minutes."""
        return cls(start=start, end=start + duration)

    @classmethod
    def from_start_end(cls, start: int, end: int, end_is_inclusive: bool) -> "TimeRange":
        """
        Create a range from explicit bounds.

        An inclusive end is stored as ``end + 1`` so every range stays half-open.
        """
        return cls(start=start, end=end + 1 if end_is_inclusive else end)

    def duration(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def contains(self, other: Union[int, "TimeRange"]) -> bool:
        """Check whether a minute, or a whole range, lies inside this range."""
        if isinstance(other, TimeRange):
            return self.start <= other.start and other.end <= self.end
        return self.start <= other < self.end

    def __contains__(self, other: Union[int, "TimeRange"]) -> bool:
        return self.contains(other)

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another. Touching ranges do not overlap."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{_format_minutes(self.start)}-{_format_minutes(self.end)}"


WHOLE_DAY = TimeRange(start=START_OF_DAY, end=DAY_LENGTH)


@dataclass(frozen=True)
class Event:
    """
    A booked event: a name, when it happens and who attends it.
    """
    name: str
    when: TimeRange
    attendees: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "attendees", frozenset(self.attendees))

    def involves_any(self, people: Iterable[str]) -> bool:
        """Check if at least one of ``people`` attends this event."""
        return not self.attendees.isdisjoint(people)


@dataclass(frozen=True)
class MeetingRequest:
    """
    A meeting to be placed: its length plus required and optional attendees.

    The two attendee sets never share a member. Fields are read-only;
    optional attendees are added through ``add_optional_attendee``.
    """
    attendees: FrozenSet[str]
    duration_minutes: int
    optional_attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "attendees", frozenset(self.attendees))
        object.__setattr__(self, "optional_attendees", frozenset(self.optional_attendees))

        if self.duration_minutes < 0:
            raise InvalidDurationError(
                f"Meeting duration must not be negative, got {self.duration_minutes}"
            )

        both = self.attendees & self.optional_attendees
        if both:
            raise AttendeeSetConflictError(
                f"Attendees cannot be both required and optional: {', '.join(sorted(both))}"
            )

    def add_optional_attendee(self, attendee: str) -> None:
        """Add one optional attendee to the request."""
        if attendee in self.attendees:
            raise AttendeeSetConflictError(
                f"Attendee '{attendee}' is already required"
            )
        object.__setattr__(self, "optional_attendees", self.optional_attendees | {attendee})


@dataclass
class TimeSlot:
    """
    Represents a found available time slot.
    """
    time_range: TimeRange

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: HH:MM - HH:MM (N min)
        """
        start = _format_minutes(self.time_range.start)
        end = _format_minutes(self.time_range.end)
        return f"{start} - {end} ({self.time_range.duration()} min)"
