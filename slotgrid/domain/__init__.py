"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability_matcher import AvailabilityMatcher, to_slot_constraints
from .calendar_merger import merge_day_appointment_sets
from .exceptions import (
    CalendarSourceError,
    InvalidArraySize,
    InvalidDuration,
    InvalidStartBoundary,
    InvalidTime,
    SchedulingError,
)
from .models import DayAppointmentSet, TimePeriod
from .weekly_template import WeeklyTemplate

__all__ = [
    "AvailabilityMatcher",
    "to_slot_constraints",
    "merge_day_appointment_sets",
    "CalendarSourceError",
    "InvalidArraySize",
    "InvalidDuration",
    "InvalidStartBoundary",
    "InvalidTime",
    "SchedulingError",
    "DayAppointmentSet",
    "TimePeriod",
    "WeeklyTemplate",
]
