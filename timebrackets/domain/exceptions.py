"""
Domain-specific exception hierarchy for the timebrackets package.
"""


class TimebracketsError(Exception):
    """Base class for all application-level errors."""


class InvalidBracketError(TimebracketsError):
    """Raised when a bracket starts after it ends."""


class AvailabilitySourceError(TimebracketsError):
    """Raised when availability data cannot be loaded or parsed."""
