"""
Overlap predicate for time brackets.

Brackets are closed intervals: two brackets that only touch at an endpoint
still overlap.
"""

from enum import Enum

from .models import TimeBracket


class BracketRelation(str, Enum):
    """How a bracket ``d1`` sits relative to a bracket ``d2``."""
    BEFORE = "before"                # d1 ends before d2 starts
    AFTER = "after"                  # d1 starts after d2 ends
    EQUAL = "equal"
    INSIDE = "inside"                # d1 nested in d2
    CONTAINS = "contains"            # d2 nested in d1
    OVERLAPS_START = "overlaps_start"  # d1 hangs off the left of d2
    OVERLAPS_END = "overlaps_end"      # d1 hangs off the right of d2

    @property
    def is_disjoint(self) -> bool:
        return self in (BracketRelation.BEFORE, BracketRelation.AFTER)


def classify_relation(d1: TimeBracket, d2: TimeBracket) -> BracketRelation:
    """
    Classify the relationship of ``d1`` to ``d2``.

    Every pair of well-formed brackets maps to exactly one relation.
    """
    if d1.end_date < d2.start_date:
        return BracketRelation.BEFORE
    if d1.start_date > d2.end_date:
        return BracketRelation.AFTER
    if d1.start_date == d2.start_date and d1.end_date == d2.end_date:
        return BracketRelation.EQUAL
    if d1.start_date >= d2.start_date and d1.end_date <= d2.end_date:
        return BracketRelation.INSIDE
    if d1.start_date <= d2.start_date and d1.end_date >= d2.end_date:
        return BracketRelation.CONTAINS
    if d1.start_date < d2.start_date:
        return BracketRelation.OVERLAPS_START
    return BracketRelation.OVERLAPS_END


def brackets_overlap(d1: TimeBracket, d2: TimeBracket) -> bool:
    """Do the two brackets share at least one instant (even partially)?"""
    return not classify_relation(d1, d2).is_disjoint
