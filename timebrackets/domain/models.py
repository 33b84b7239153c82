"""
Domain models for availability brackets.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

from pendulum import DateTime

from .exceptions import InvalidBracketError


@dataclass(frozen=True)
class TimeBracket:
    """
    A closed interval [start_date, end_date] during which someone is available.

    start_date <= end_date is expected but not enforced here; call
    ``validate()`` where input comes from outside.
    """
    start_date: DateTime
    end_date: DateTime

    def validate(self) -> "TimeBracket":
        """Return self, or raise InvalidBracketError if start is after end."""
        if self.start_date > self.end_date:
            raise InvalidBracketError(
                f"Start time {self.start_date} must not be after end time {self.end_date}"
            )
        return self

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end_date - self.start_date).total_seconds() / 60)

    def format_display(self) -> str:
        """
        Format the bracket for display.
        Format: Weekday, DD.MM.YYYY HH:mm – [DD.MM.YYYY ]HH:mm
        """
        start = self.start_date
        end = self.end_date

        if start.date() == end.date():
            end_str = end.format("HH:mm")
        else:
            end_str = end.format("DD.MM.YYYY HH:mm")

        return f"{start.format('dddd, DD.MM.YYYY HH:mm')} – {end_str}"

    def __str__(self) -> str:
        return f"{self.start_date.to_iso8601_string()} - {self.end_date.to_iso8601_string()}"


@dataclass(frozen=True)
class AttendeeAvailability:
    """All brackets one attendee submitted, in submission order."""
    availability: Tuple[TimeBracket, ...] = ()

    def __post_init__(self):
        # Accept any iterable from callers but store an immutable copy
        object.__setattr__(self, "availability", tuple(self.availability))


@dataclass(frozen=True)
class EventAvailability:
    """The availability of every attendee for one scheduling request."""
    attendee_availability: Tuple[AttendeeAvailability, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "attendee_availability", tuple(self.attendee_availability))

    def all_brackets(self) -> Iterator[TimeBracket]:
        """Yield every bracket, attendee by attendee, in submission order."""
        for attendee in self.attendee_availability:
            yield from attendee.availability

    def bracket_count(self) -> int:
        return sum(len(a.availability) for a in self.attendee_availability)


@dataclass(frozen=True)
class ScoredBracket:
    """A bracket paired with the number of submitted brackets touching it."""
    bracket: TimeBracket
    overlaps: int

    def key(self) -> Tuple[DateTime, DateTime, int]:
        """Value-equality key used for deduplication."""
        return (self.bracket.start_date, self.bracket.end_date, self.overlaps)
