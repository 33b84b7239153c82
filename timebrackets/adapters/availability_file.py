"""
Availability source backed by a YAML document.

Example document::

    timezone: Europe/Berlin
    attendees:
      - name: alice
        brackets:
          - start: "2024-11-25 09:00"
            end: "2024-11-25 12:00"
        forms:
          - start: "2024-11-26 18:00"
            end: "2024-11-28 08:00"

``brackets`` are used as submitted. ``forms`` are multi-day spans that get
split into one bracket per day.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import pendulum
import yaml
from pendulum import DateTime
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..domain.day_splitter import DaySplitter
from ..domain.exceptions import AvailabilitySourceError, InvalidBracketError
from ..domain.models import TimeBracket

logger = logging.getLogger(__name__)


class BracketEntry(BaseModel):
    """One start/end pair as written in the document."""
    start: str
    end: str

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_timestamp(cls, value):
        """YAML turns unquoted timestamps into date objects; keep them as text."""
        if isinstance(value, date):
            return value.isoformat()
        return value


class AttendeeEntry(BaseModel):
    """An attendee and everything they submitted."""
    name: str
    brackets: List[BracketEntry] = Field(default_factory=list)
    forms: List[BracketEntry] = Field(default_factory=list)


class AvailabilityDocument(BaseModel):
    """Root of an availability YAML document."""
    timezone: Optional[str] = None
    attendees: List[AttendeeEntry] = Field(default_factory=list)

    @field_validator("attendees")
    @classmethod
    def validate_attendees(cls, value: List[AttendeeEntry]) -> List[AttendeeEntry]:
        """Ensure attendee names are unique."""
        seen_names: set[str] = set()
        for attendee in value:
            name_key = attendee.name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate attendee name detected: {attendee.name}")
            seen_names.add(name_key)
        return value


class AvailabilityFile:
    """
    Loads attendee availability from a YAML file.

    Brackets are parsed once on construction; ``get_availability`` then
    serves lookups from memory.
    """

    def __init__(
        self,
        path: Path,
        timezone: str = "UTC",
        splitter: DaySplitter | None = None,
    ):
        """
        Args:
            path: YAML document to load
            timezone: Timezone for instants without an offset, unless the
                document names its own
            splitter: Splitter used to expand ``forms``
        """
        self.path = path
        self._splitter = splitter or DaySplitter()

        document = self._load_document(path)
        self.timezone = document.timezone or timezone
        self._availability = self._parse_attendees(document.attendees)

    @property
    def attendee_names(self) -> List[str]:
        return list(self._availability.keys())

    def get_availability(self, attendees: List[str]) -> Dict[str, List[TimeBracket]]:
        """
        Look up brackets for the requested attendees.

        Args:
            attendees: Attendee names, matched case-insensitively

        Returns:
            Dictionary mapping requested name -> list of TimeBracket objects.
            Names missing from the document are left out.
        """
        by_key = {name.lower(): name for name in self._availability}
        result: Dict[str, List[TimeBracket]] = {}

        for attendee in attendees:
            name = by_key.get(attendee.lower())
            if name is None:
                logger.warning("Attendee %s not found in %s", attendee, self.path)
                continue
            result[attendee] = list(self._availability[name])

        return result

    @staticmethod
    def _load_document(path: Path) -> AvailabilityDocument:
        if not path.exists():
            raise AvailabilitySourceError(f"Availability file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise AvailabilitySourceError(f"Invalid YAML in {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise AvailabilitySourceError("Availability file must contain a mapping at the root level.")

        try:
            return AvailabilityDocument(**data)
        except ValidationError as exc:
            raise AvailabilitySourceError(f"Invalid availability file {path}: {exc}") from exc

    def _parse_attendees(self, attendees: List[AttendeeEntry]) -> Dict[str, List[TimeBracket]]:
        availability: Dict[str, List[TimeBracket]] = {}

        for attendee in attendees:
            brackets = [self._parse_bracket(entry) for entry in attendee.brackets]

            for form in attendee.forms:
                form_bracket = self._parse_bracket(form)
                brackets.extend(
                    self._splitter.split(form_bracket.start_date, form_bracket.end_date)
                )

            availability[attendee.name] = brackets

        return availability

    def _parse_bracket(self, entry: BracketEntry) -> TimeBracket:
        try:
            bracket = TimeBracket(
                start_date=self._parse_instant(entry.start),
                end_date=self._parse_instant(entry.end),
            )
            return bracket.validate()
        except (ValueError, InvalidBracketError) as exc:
            raise AvailabilitySourceError(
                f"Invalid bracket {entry.start} - {entry.end} in {self.path}: {exc}"
            ) from exc

    def _parse_instant(self, value: str) -> DateTime:
        parsed = pendulum.parse(value, tz=self.timezone)
        if not isinstance(parsed, DateTime):
            raise ValueError(f"Expected a date and time, got {value!r}")
        return parsed
