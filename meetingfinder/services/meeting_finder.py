"""
Application services for finding free meeting slots.

The service coordinates loading booked events via an event source adapter
and delegates the actual slot calculation to the domain-level
``SlotFinder``. This keeps the CLI thin and improves testability by
allowing the event source to be stubbed via a simple protocol.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence

from ..domain.models import Event, MeetingRequest
from ..domain.slot_finder import SlotFinder, SlotSearchResult


class EventSourceProtocol(Protocol):
    """Protocol describing the event source behaviour needed by the service."""

    def get_events(self, attendees: Optional[Iterable[str]] = None) -> List[Event]:
        """Return booked events, optionally limited to the given attendees."""


class MeetingFinderService:
    """
    Orchestrates event retrieval and slot search.

    Dependency inversion toward a protocol makes it easy to plug in the
    agenda file adapter or a stub in tests.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        slot_finder: SlotFinder,
    ) -> None:
        self._event_source = event_source
        self._slot_finder = slot_finder

    def find_slots(
        self,
        *,
        attendees: Sequence[str],
        optional_attendees: Sequence[str] = (),
        duration_minutes: int,
    ) -> SlotSearchResult:
        """
        Build the meeting request, load relevant events and search for free slots.

        Raises:
            InvalidDurationError: If the duration is negative
            AttendeeSetConflictError: If someone is both required and optional
        """
        request = MeetingRequest(
            attendees=frozenset(attendees),
            duration_minutes=duration_minutes,
            optional_attendees=frozenset(optional_attendees),
        )

        events = self.fetch_events(
            attendees=[*request.attendees, *request.optional_attendees],
        )

        return self._slot_finder.search(events, request)

    def fetch_events(self, *, attendees: Sequence[str]) -> List[Event]:
        """Fetch booked events involving the requested attendees."""
        return list(self._event_source.get_events(attendees=list(attendees)))
