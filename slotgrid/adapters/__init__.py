"""
Adapters layer - Busy-calendar sources.
"""

from .json_calendar import JsonBusyCalendar
from .memory_calendar import InMemoryBusyCalendar

__all__ = ["JsonBusyCalendar", "InMemoryBusyCalendar"]
