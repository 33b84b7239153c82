"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .scheduling_service import AvailabilitySourceProtocol, SchedulingService

__all__ = ["AvailabilitySourceProtocol", "SchedulingService"]
