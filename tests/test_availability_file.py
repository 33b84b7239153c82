"""
Tests for the YAML availability source.
"""

import pendulum
import pytest

from timebrackets.adapters.availability_file import AvailabilityFile
from timebrackets.domain.exceptions import AvailabilitySourceError


DOCUMENT = """
timezone: Europe/Berlin
attendees:
  - name: Alice
    brackets:
      - start: "2024-11-25 09:00"
        end: "2024-11-25 12:00"
    forms:
      - start: "2024-11-26 22:00"
        end: "2024-11-28 02:00"
  - name: bob
    brackets:
      - start: 2024-11-25 10:00:00
        end: 2024-11-25 11:00:00
  - name: carol
"""


def _write(tmp_path, content: str):
    path = tmp_path / "availability.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestAvailabilityFile:
    """Tests for AvailabilityFile."""

    def test_loads_brackets_and_splits_forms(self, tmp_path):
        """Brackets are kept, forms become one bracket per day."""
        source = AvailabilityFile(_write(tmp_path, DOCUMENT))

        availability = source.get_availability(["Alice"])
        brackets = availability["Alice"]

        assert len(brackets) == 3
        assert brackets[0].start_date == pendulum.parse("2024-11-25 09:00", tz="Europe/Berlin")
        assert brackets[1].start_date == pendulum.parse("2024-11-26 22:00", tz="Europe/Berlin")
        assert brackets[1].end_date == pendulum.parse("2024-11-27 02:00", tz="Europe/Berlin")
        assert brackets[2].start_date == pendulum.parse("2024-11-27 22:00", tz="Europe/Berlin")
        assert brackets[2].end_date == pendulum.parse("2024-11-28 02:00", tz="Europe/Berlin")

    def test_unquoted_timestamps(self, tmp_path):
        """Timestamps YAML parses on its own are read in the document timezone."""
        source = AvailabilityFile(_write(tmp_path, DOCUMENT))

        bracket = source.get_availability(["bob"])["bob"][0]

        assert bracket.start_date == pendulum.parse("2024-11-25 10:00", tz="Europe/Berlin")
        assert bracket.end_date == pendulum.parse("2024-11-25 11:00", tz="Europe/Berlin")

    def test_lookup_is_case_insensitive(self, tmp_path):
        """Requested names keep their spelling in the result."""
        source = AvailabilityFile(_write(tmp_path, DOCUMENT))

        availability = source.get_availability(["ALICE", "Carol"])

        assert set(availability.keys()) == {"ALICE", "Carol"}
        assert availability["Carol"] == []

    def test_unknown_attendees_are_omitted(self, tmp_path):
        """Attendees missing from the document are left out."""
        source = AvailabilityFile(_write(tmp_path, DOCUMENT))

        assert source.get_availability(["dave"]) == {}

    def test_attendee_names(self, tmp_path):
        """Names are listed in document order."""
        source = AvailabilityFile(_write(tmp_path, DOCUMENT))

        assert source.attendee_names == ["Alice", "bob", "carol"]

    def test_default_timezone_applies_without_document_timezone(self, tmp_path):
        """The constructor timezone is used when the document names none."""
        path = _write(tmp_path, (
            "attendees:\n"
            "  - name: alice\n"
            "    brackets:\n"
            "      - start: '2024-11-25 09:00'\n"
            "        end: '2024-11-25 10:00'\n"
        ))

        source = AvailabilityFile(path, timezone="America/New_York")
        bracket = source.get_availability(["alice"])["alice"][0]

        assert source.timezone == "America/New_York"
        assert bracket.start_date == pendulum.parse("2024-11-25 09:00", tz="America/New_York")

    def test_missing_file(self, tmp_path):
        """A missing document raises AvailabilitySourceError."""
        with pytest.raises(AvailabilitySourceError, match="not found"):
            AvailabilityFile(tmp_path / "missing.yaml")

    def test_duplicate_attendees(self, tmp_path):
        """Attendee names must be unique, ignoring case."""
        path = _write(tmp_path, "attendees:\n  - name: alice\n  - name: ALICE\n")

        with pytest.raises(AvailabilitySourceError, match="Duplicate attendee name"):
            AvailabilityFile(path)

    def test_reversed_bracket(self, tmp_path):
        """A bracket ending before it starts is rejected."""
        path = _write(tmp_path, (
            "attendees:\n"
            "  - name: alice\n"
            "    brackets:\n"
            "      - start: '2024-11-25 12:00'\n"
            "        end: '2024-11-25 09:00'\n"
        ))

        with pytest.raises(AvailabilitySourceError, match="Invalid bracket"):
            AvailabilityFile(path)

    def test_unparseable_instant(self, tmp_path):
        """Text that is not a date is rejected."""
        path = _write(tmp_path, (
            "attendees:\n"
            "  - name: alice\n"
            "    brackets:\n"
            "      - start: 'next tuesday'\n"
            "        end: '2024-11-25 09:00'\n"
        ))

        with pytest.raises(AvailabilitySourceError, match="Invalid bracket"):
            AvailabilityFile(path)

    def test_root_must_be_mapping(self, tmp_path):
        """A YAML list at the root is rejected."""
        path = _write(tmp_path, "- alice\n- bob\n")

        with pytest.raises(AvailabilitySourceError, match="mapping at the root level"):
            AvailabilityFile(path)
