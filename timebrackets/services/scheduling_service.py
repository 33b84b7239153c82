"""
Application services for finding well-attended meeting brackets.

The service fetches per-attendee brackets through an availability source
adapter and hands them to the domain ``OverlapRanker``. Attendee names only
group brackets here; the ranker never sees them.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Protocol, Sequence

from pendulum import DateTime

from ..domain.day_splitter import DaySplitter
from ..domain.models import AttendeeAvailability, EventAvailability, TimeBracket
from ..domain.overlap_ranker import OverlapRanker

logger = logging.getLogger(__name__)


class AvailabilitySourceProtocol(Protocol):
    """Protocol describing the availability source behaviour needed by the service."""

    def get_availability(self, attendees: List[str]) -> Dict[str, List[TimeBracket]]:
        """Return submitted brackets per attendee."""


class SchedulingService:
    """
    Orchestrates availability retrieval, day splitting and ranking.

    Depending on a protocol rather than a concrete adapter keeps the
    file-based source and test stubs interchangeable.
    """

    def __init__(
        self,
        availability_source: AvailabilitySourceProtocol,
        ranker: OverlapRanker,
        splitter: DaySplitter | None = None,
    ) -> None:
        self._availability_source = availability_source
        self._ranker = ranker
        self._splitter = splitter or DaySplitter()

    def find_potential_times(self, *, attendees: Sequence[str]) -> List[TimeBracket]:
        """
        Retrieve availability and return the ranked candidate brackets.
        """
        event_availability = self.fetch_availability(attendees=attendees)
        return self._ranker.rank(event_availability)

    def fetch_availability(self, *, attendees: Sequence[str]) -> EventAvailability:
        """Fetch availability for the requested attendees."""
        attendee_list = list(attendees)

        availability = self._availability_source.get_availability(attendee_list)
        normalized = self._ensure_attendee_entries(attendee_list, availability)

        return EventAvailability(
            attendee_availability=[
                AttendeeAvailability(availability=brackets)
                for brackets in normalized.values()
            ]
        )

    def submit_availability(self, form_start: DateTime, form_end: DateTime) -> List[TimeBracket]:
        """
        Validate a submitted form span and split it into per-day brackets.

        Raises:
            InvalidBracketError: If the form starts after it ends
        """
        TimeBracket(start_date=form_start, end_date=form_end).validate()
        return self._splitter.split(form_start, form_end)

    @staticmethod
    def _ensure_attendee_entries(
        attendees: Sequence[str],
        availability: Dict[str, List[TimeBracket]],
    ) -> Dict[str, List[TimeBracket]]:
        """
        Ensure every requested attendee appears in the availability map.

        Sources may omit attendees who submitted nothing; we normalise
        that to an explicit empty list for deterministic downstream behaviour.
        """
        normalized: Dict[str, List[TimeBracket]] = {}

        for attendee in attendees:
            if attendee not in availability:
                logger.debug("No availability found for %s", attendee)
            normalized[attendee] = availability.get(attendee, [])

        # Include any additional entries provided by the source as-is.
        for attendee, brackets in availability.items():
            if attendee not in normalized:
                normalized[attendee] = brackets

        return normalized
