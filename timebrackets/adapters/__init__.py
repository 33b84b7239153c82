"""
Adapters layer - External availability sources.
"""

from .availability_file import AvailabilityDocument, AvailabilityFile

__all__ = ["AvailabilityDocument", "AvailabilityFile"]
