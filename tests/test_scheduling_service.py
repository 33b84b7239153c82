"""
Tests for the SchedulingService orchestration layer.
"""

from typing import Dict, List

import pendulum
import pytest

from timebrackets.domain.day_splitter import DaySplitter
from timebrackets.domain.exceptions import InvalidBracketError
from timebrackets.domain.models import TimeBracket
from timebrackets.domain.overlap_ranker import OverlapRanker
from timebrackets.services.scheduling_service import SchedulingService


class StubAvailabilitySource:
    """Minimal stub matching AvailabilitySourceProtocol."""

    def __init__(self, availability: Dict[str, List[TimeBracket]]):
        self._availability = availability
        self.calls: List[tuple] = []

    def get_availability(self, attendees):
        self.calls.append(tuple(attendees))
        return self._availability


def _bracket(start: str, end: str) -> TimeBracket:
    return TimeBracket(
        start_date=pendulum.parse(start, tz="Europe/Berlin"),
        end_date=pendulum.parse(end, tz="Europe/Berlin"),
    )


def _build_service(availability: Dict[str, List[TimeBracket]]) -> SchedulingService:
    return SchedulingService(
        availability_source=StubAvailabilitySource(availability),
        ranker=OverlapRanker(),
        splitter=DaySplitter(),
    )


def test_fetch_availability_includes_missing_attendees():
    """Attendees without entries should still appear, with no brackets."""
    morning = _bracket("2024-11-25 09:00", "2024-11-25 12:00")
    service = _build_service(availability={"alice": [morning]})

    event = service.fetch_availability(attendees=["alice", "bob"])

    assert len(event.attendee_availability) == 2
    assert event.attendee_availability[0].availability == (morning,)
    assert event.attendee_availability[1].availability == ()


def test_fetch_availability_keeps_extra_attendees():
    """Attendees reported by the source but not requested are appended."""
    morning = _bracket("2024-11-25 09:00", "2024-11-25 12:00")
    evening = _bracket("2024-11-25 18:00", "2024-11-25 20:00")
    service = _build_service(availability={"alice": [morning], "carol": [evening]})

    event = service.fetch_availability(attendees=["alice"])

    assert list(event.all_brackets()) == [morning, evening]


def test_find_potential_times_ranks_source_data():
    """End-to-end call should yield the best-attended bracket first."""
    morning = _bracket("2024-11-25 09:00", "2024-11-25 12:00")
    meeting = _bracket("2024-11-25 10:00", "2024-11-25 11:00")
    evening = _bracket("2024-11-25 18:00", "2024-11-25 20:00")
    source = StubAvailabilitySource({
        "alice": [morning, evening],
        "bob": [meeting],
        "carol": [meeting],
    })
    service = SchedulingService(availability_source=source, ranker=OverlapRanker())

    ranked = service.find_potential_times(attendees=["alice", "bob", "carol"])

    assert source.calls == [("alice", "bob", "carol")]
    assert ranked == [morning, meeting, evening]


def test_submit_availability_splits_per_day():
    """A multi-day form is returned as one bracket per day."""
    service = _build_service(availability={})

    brackets = service.submit_availability(
        pendulum.parse("2024-11-25 09:00", tz="Europe/Berlin"),
        pendulum.parse("2024-11-27 17:00", tz="Europe/Berlin"),
    )

    assert len(brackets) == 3
    assert all(b.start_date.hour == 9 and b.end_date.hour == 17 for b in brackets)


def test_submit_availability_rejects_reversed_form():
    """A form ending before it starts is rejected."""
    service = _build_service(availability={})

    with pytest.raises(InvalidBracketError):
        service.submit_availability(
            pendulum.parse("2024-11-27 17:00", tz="Europe/Berlin"),
            pendulum.parse("2024-11-25 09:00", tz="Europe/Berlin"),
        )
