"""
Event source that reads a day's booked events from a YAML agenda file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pendulum
import yaml

from ..config import AppConfig
from ..domain.exceptions import EventSourceError, MeetingFinderError
from ..domain.models import Event, TimeRange, get_time_in_minutes

logger = logging.getLogger(__name__)


class AgendaFileEventSource:
    """
    Loads booked events from an agenda file.

    The file holds a mapping with an ``events`` list. Each entry names the
    event, its attendees and when it happens::

        events:
          - name: Standup
            start: "08:30"
            end: "09:00"          # or: duration: 30
            end_inclusive: false  # optional
            attendees: [alice, bob@example.com]

    Times are ``HH:mm`` strings or plain minute offsets. JSON documents are
    accepted too since they are valid YAML.
    """

    def __init__(self, agenda_path: Path, config: Optional[AppConfig] = None):
        """
        Initialize the event source.

        Args:
            agenda_path: Path to the agenda file
            config: Optional AppConfig used to resolve attendee aliases to emails
        """
        self.agenda_path = Path(agenda_path)
        self.config = config

    def get_events(self, attendees: Optional[Iterable[str]] = None) -> List[Event]:
        """
        Load booked events from the agenda file.

        Args:
            attendees: If given, only events attended by at least one of them

        Returns:
            List of Event objects

        Raises:
            EventSourceError: If the file is missing or not a valid agenda
        """
        entries = self._load_entries()

        events: List[Event] = []
        for index, entry in enumerate(entries):
            try:
                events.append(self._parse_event(entry))
            except (KeyError, TypeError, ValueError, MeetingFinderError) as exc:
                logger.warning(
                    "Skipping invalid event #%d in %s: %s", index + 1, self.agenda_path, exc
                )

        if attendees is not None:
            wanted = {self._resolve_attendee(a) for a in attendees}
            events = [event for event in events if event.involves_any(wanted)]

        logger.debug("Loaded %d event(s) from %s", len(events), self.agenda_path)
        return events

    def _load_entries(self) -> List[Any]:
        if not self.agenda_path.exists():
            raise EventSourceError(f"Agenda file not found: {self.agenda_path}")

        try:
            with open(self.agenda_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise EventSourceError(f"Invalid YAML in {self.agenda_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise EventSourceError("Agenda file must contain a mapping at the root level.")

        entries = data.get("events") or []
        if not isinstance(entries, list):
            raise EventSourceError("'events' in the agenda file must be a list.")

        return entries

    def _parse_event(self, entry: Dict[str, Any]) -> Event:
        start = self._parse_minutes(entry["start"])

        if "end" in entry:
            when = TimeRange.from_start_end(
                start,
                self._parse_minutes(entry["end"]),
                bool(entry.get("end_inclusive", False)),
            )
        else:
            when = TimeRange.from_start_duration(start, int(entry["duration"]))

        attendees = entry.get("attendees") or []
        if isinstance(attendees, str):
            attendees = [attendees]

        return Event(
            name=str(entry.get("name", "")),
            when=when,
            attendees=frozenset(self._resolve_attendee(str(a)) for a in attendees),
        )

    @staticmethod
    def _parse_minutes(value: Any) -> int:
        """Convert ``HH:mm`` or a minute offset into minutes since midnight."""
        # YAML reads unquoted times such as 10:30 as base-60 integers,
        # which already are minute offsets.
        if isinstance(value, int) and not isinstance(value, bool):
            return value

        parsed = pendulum.from_format(str(value).strip(), "HH:mm")
        return get_time_in_minutes(parsed.hour, parsed.minute)

    def _resolve_attendee(self, identifier: str) -> str:
        """Map an alias to its configured email; unknown people keep their identifier."""
        if self.config is None:
            return identifier
        try:
            return self.config.resolve_participant(identifier)
        except ValueError:
            return identifier
