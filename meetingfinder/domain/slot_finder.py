"""
Core business logic for finding free meeting slots within a single day.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import logging
from dataclasses import dataclass
from functools import reduce
from typing import FrozenSet, Iterable, List, Tuple

from .models import WHOLE_DAY, Event, MeetingRequest, TimeRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotSearchResult:
    """
    Outcome of a slot search.

    ``attendees`` holds everyone whose calendar was honoured; it drops the
    optional attendees when no slot could accommodate them.
    """
    slots: List[TimeRange]
    attendees: FrozenSet[str]
    optional_included: bool


class SlotFinder:
    """
    Finds every free range of a day long enough to host a requested meeting.

    Algorithm:
    1. Start with the whole day as a single free slot
    2. For each event attended by someone we care about, cut the event
       out of every free slot it overlaps
    3. Drop fragments shorter than the requested duration
    4. Return the remaining slots in chronological order

    Optional attendees are honoured when possible. If nothing fits with
    them and there are required attendees, the search is repeated for the
    required attendees only.
    """

    def query(self, events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
        """
        Find all free slots for the request.

        Args:
            events: Booked events of the day
            request: The meeting to place

        Returns:
            Free ranges sorted by start time, empty if none fits
        """
        return self.search(events, request).slots

    def search(self, events: Iterable[Event], request: MeetingRequest) -> SlotSearchResult:
        """Find free slots and report which attendees they account for."""
        events = tuple(events)
        required = request.attendees
        optional = request.optional_attendees
        duration = request.duration_minutes

        if duration > WHOLE_DAY.duration():
            logger.debug("Requested %d minutes do not fit in a day", duration)
            return SlotSearchResult(slots=[], attendees=required | optional, optional_included=bool(optional))

        if optional:
            everyone = required | optional
            slots = self.find_free_slots(events, everyone, duration)

            # With nobody required there is nothing to fall back to.
            if slots or not required:
                return SlotSearchResult(slots=slots, attendees=everyone, optional_included=True)

            logger.debug(
                "No slot fits optional attendees %s, retrying with required attendees only",
                sorted(optional),
            )

        slots = self.find_free_slots(events, required, duration)
        return SlotSearchResult(slots=slots, attendees=required, optional_included=False)

    def find_free_slots(
        self,
        events: Iterable[Event],
        blocking_attendees: FrozenSet[str],
        duration_minutes: int,
    ) -> List[TimeRange]:
        """
        Cut every event attended by ``blocking_attendees`` out of the day.

        Events without any blocking attendee, including events with no
        attendees at all, leave the free slots untouched.
        """
        relevant = [event for event in events if event.involves_any(blocking_attendees)]

        free: Tuple[TimeRange, ...] = reduce(
            lambda slots, event: self._remove_event(slots, event.when, duration_minutes),
            relevant,
            (WHOLE_DAY,),
        )

        logger.debug(
            "%d blocking event(s) leave %d free slot(s) of at least %d min",
            len(relevant),
            len(free),
            duration_minutes,
        )

        return sorted(free)

    def _remove_event(
        self,
        slots: Tuple[TimeRange, ...],
        busy: TimeRange,
        duration_minutes: int,
    ) -> Tuple[TimeRange, ...]:
        """
        Return new free slots with ``busy`` cut out of them.

        Example:
        Slot: 00:00 - 24:00
        Busy: 08:30 - 09:00
        Result: [00:00-08:30, 09:00-24:00]
        """
        remaining: List[TimeRange] = []

        for slot in slots:
            if not slot.overlaps(busy):
                remaining.append(slot)
                continue

            remaining.extend(
                fragment
                for fragment in self._split_around(slot, busy)
                if fragment.duration() >= duration_minutes
            )

        return tuple(remaining)

    @staticmethod
    def _split_around(slot: TimeRange, busy: TimeRange) -> List[TimeRange]:
        """
        Return the parts of ``slot`` before and after ``busy``.

        Empty parts are kept; the caller filters fragments by duration.
        """
        fragments: List[TimeRange] = []

        if slot.start <= busy.start:
            fragments.append(TimeRange(start=slot.start, end=busy.start))
        if busy.end <= slot.end:
            fragments.append(TimeRange(start=busy.end, end=slot.end))

        return fragments
