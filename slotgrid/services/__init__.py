"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .appointment_planner import AppointmentRequestPlanner
from .availability_service import AvailabilityService, BusyCalendarProtocol

__all__ = ["AppointmentRequestPlanner", "AvailabilityService", "BusyCalendarProtocol"]
