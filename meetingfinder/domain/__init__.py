"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import (
    AttendeeSetConflictError,
    EventSourceError,
    InvalidDurationError,
    InvalidRangeError,
    MeetingFinderError,
)
from .models import (
    DAY_LENGTH,
    END_OF_DAY,
    START_OF_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeRange,
    TimeSlot,
    get_time_in_minutes,
)
from .slot_finder import SlotFinder, SlotSearchResult

__all__ = [
    "AttendeeSetConflictError",
    "EventSourceError",
    "InvalidDurationError",
    "InvalidRangeError",
    "MeetingFinderError",
    "DAY_LENGTH",
    "END_OF_DAY",
    "START_OF_DAY",
    "WHOLE_DAY",
    "Event",
    "MeetingRequest",
    "TimeRange",
    "TimeSlot",
    "get_time_in_minutes",
    "SlotFinder",
    "SlotSearchResult",
]
