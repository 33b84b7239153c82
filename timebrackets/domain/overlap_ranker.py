"""
Ranks submitted availability brackets by how many other brackets touch them.

Pure domain logic: no I/O, no state kept between calls.
"""

import logging
from bisect import bisect_left, bisect_right
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pendulum import DateTime

from .models import EventAvailability, ScoredBracket, TimeBracket
from .overlap import brackets_overlap

logger = logging.getLogger(__name__)


DEFAULT_MAX_RESULTS = 5


class ScoringStrategy(str, Enum):
    """How overlap counts are computed."""
    PAIRWISE = "pairwise"  # O(n^2), compares every bracket with every other
    SWEEP = "sweep"        # O(n log n), counts via sorted endpoints


class OverlapRanker:
    """
    Produces a short-list of candidate brackets with maximal attendee overlap.

    Algorithm:
    1. Flatten every attendee's brackets into one list
    2. Score each bracket by the number of brackets overlapping it (itself included)
    3. Sort by score, highest first; ties keep submission order
    4. Drop duplicate (start, end, score) entries, keeping the first
    5. Truncate to ``max_results``

    Both strategies produce identical scores for well-formed brackets.
    """

    def __init__(
        self,
        max_results: Optional[int] = DEFAULT_MAX_RESULTS,
        strategy: ScoringStrategy = ScoringStrategy.PAIRWISE,
    ):
        if max_results is not None and max_results < 1:
            raise ValueError(f"max_results must be at least 1, got {max_results}")
        self.max_results = max_results
        self.strategy = ScoringStrategy(strategy)

    def rank(self, event_availability: EventAvailability) -> List[TimeBracket]:
        """
        Return candidate brackets ordered from most to least overlapping.

        Args:
            event_availability: Brackets submitted by every attendee

        Returns:
            At most ``max_results`` distinct brackets, all taken from the input
        """
        return [scored.bracket for scored in self.score(event_availability)]

    def score(self, event_availability: EventAvailability) -> List[ScoredBracket]:
        """Same as ``rank`` but keeps the overlap count of every bracket."""
        all_brackets = list(event_availability.all_brackets())

        if not all_brackets:
            return []

        if self.strategy is ScoringStrategy.SWEEP:
            counts = self._count_sweep(all_brackets)
        else:
            counts = self._count_pairwise(all_brackets)

        scored = [
            ScoredBracket(bracket=bracket, overlaps=count)
            for bracket, count in zip(all_brackets, counts)
        ]

        # sorted() is stable, so equal scores keep their submission order
        scored = sorted(scored, key=lambda s: s.overlaps, reverse=True)
        scored = self._deduplicate(scored)

        if self.max_results is not None:
            scored = scored[:self.max_results]

        logger.debug(
            "Ranked %d brackets from %d attendees using %s scoring, kept %d",
            len(all_brackets),
            len(event_availability.attendee_availability),
            self.strategy.value,
            len(scored),
        )

        return scored

    @staticmethod
    def _count_pairwise(brackets: List[TimeBracket]) -> List[int]:
        counts: List[int] = []

        for candidate in brackets:
            overlaps = 0
            for other in brackets:
                if brackets_overlap(candidate, other):
                    overlaps += 1
            counts.append(overlaps)

        return counts

    @staticmethod
    def _count_sweep(brackets: List[TimeBracket]) -> List[int]:
        """
        Count overlaps from sorted endpoints.

        A bracket misses a candidate only by ending before it starts or by
        starting after it ends; everything else touches it.
        """
        starts: List[DateTime] = sorted(b.start_date for b in brackets)
        ends: List[DateTime] = sorted(b.end_date for b in brackets)
        total = len(brackets)

        counts: List[int] = []
        for candidate in brackets:
            ended_before = bisect_left(ends, candidate.start_date)
            started_after = total - bisect_right(starts, candidate.end_date)
            counts.append(total - ended_before - started_after)

        return counts

    @staticmethod
    def _deduplicate(scored: List[ScoredBracket]) -> List[ScoredBracket]:
        seen: Dict[Tuple[DateTime, DateTime, int], ScoredBracket] = {}

        for entry in scored:
            seen.setdefault(entry.key(), entry)

        # dicts keep insertion order, so the first occurrence wins
        return list(seen.values())


def rank_brackets(
    event_availability: EventAvailability,
    max_results: Optional[int] = DEFAULT_MAX_RESULTS,
) -> List[TimeBracket]:
    """Rank with a default-configured OverlapRanker."""
    return OverlapRanker(max_results=max_results).rank(event_availability)
