"""
Splits a multi-day availability submission into one bracket per day.

A form spanning several days is read as "the same time-of-day window,
repeated on each day". Windows that start in the afternoon or evening and
end before noon are overnight windows and end on the following day.
"""

import logging
from typing import List

from pendulum import DateTime

from .models import TimeBracket

logger = logging.getLogger(__name__)


class DaySplitter:
    """
    Produces one TimeBracket per calendar day a form span touches.

    All day arithmetic is calendar-aware (pendulum ``add(days=...)``), so
    daylight-saving transitions keep the wall-clock time of each window.
    """

    # Form end hours before this, combined with start hours at or after it,
    # mark an overnight window.
    NOON = 12

    def split(self, form_start: DateTime, form_end: DateTime) -> List[TimeBracket]:
        """
        Split a form span into per-day brackets.

        Args:
            form_start: Start of the submitted span
            form_end: End of the submitted span

        Returns:
            One bracket per day spanned, in chronological order. Empty when
            form_end is not after form_start.
        """
        days = self.days_spanned(form_start, form_end)
        brackets: List[TimeBracket] = []

        midnight_aligned = self._is_midnight(form_start) and self._is_midnight(form_end)
        overnight = form_end.hour < self.NOON and form_start.hour >= self.NOON

        for offset in range(days):
            day_start = form_start.add(days=offset)

            if midnight_aligned or overnight:
                end_day = day_start.add(days=1)
            else:
                end_day = day_start

            # Keep the form's end time-of-day, moved onto the computed day
            day_end = form_end.set(
                year=end_day.year,
                month=end_day.month,
                day=end_day.day,
            )

            brackets.append(TimeBracket(start_date=day_start, end_date=day_end))

        logger.debug("Split %s - %s into %d day brackets", form_start, form_end, len(brackets))

        return brackets

    @staticmethod
    def days_spanned(form_start: DateTime, form_end: DateTime) -> int:
        """
        Count the calendar days a span touches.

        Whole days count once each; a trailing partial day counts as one more,
        so a 4-hour overnight span yields 1 and a midnight-to-midnight
        two-day span yields 2.
        """
        if form_end <= form_start:
            return 0

        whole_days = form_start.diff(form_end).in_days()

        if form_start.add(days=whole_days) < form_end:
            return whole_days + 1
        return whole_days

    @staticmethod
    def _is_midnight(dt: DateTime) -> bool:
        return dt.hour == 0 and dt.minute == 0


def split_days(form_start: DateTime, form_end: DateTime) -> List[TimeBracket]:
    """Split with a default DaySplitter."""
    return DaySplitter().split(form_start, form_end)
