"""
Domain-specific exception hierarchy for the meeting finder application.
"""


class MeetingFinderError(Exception):
    """Base class for all application-level errors."""


class InvalidRangeError(MeetingFinderError, ValueError):
    """Raised when a time range would end before it starts."""


class InvalidDurationError(MeetingFinderError, ValueError):
    """Raised when a meeting request asks for a negative duration."""


class AttendeeSetConflictError(MeetingFinderError, ValueError):
    """Raised when an attendee is both required and optional."""


class EventSourceError(MeetingFinderError):
    """Raised when booked events cannot be loaded or parsed."""
