"""
Domain layer - Pure business logic without external dependencies.
"""

from .day_splitter import DaySplitter, split_days
from .exceptions import AvailabilitySourceError, InvalidBracketError, TimebracketsError
from .models import AttendeeAvailability, EventAvailability, ScoredBracket, TimeBracket
from .overlap import BracketRelation, brackets_overlap, classify_relation
from .overlap_ranker import DEFAULT_MAX_RESULTS, OverlapRanker, ScoringStrategy, rank_brackets

__all__ = [
    "AttendeeAvailability",
    "AvailabilitySourceError",
    "BracketRelation",
    "DEFAULT_MAX_RESULTS",
    "DaySplitter",
    "EventAvailability",
    "InvalidBracketError",
    "OverlapRanker",
    "ScoredBracket",
    "ScoringStrategy",
    "TimeBracket",
    "TimebracketsError",
    "brackets_overlap",
    "classify_relation",
    "rank_brackets",
    "split_days",
]
