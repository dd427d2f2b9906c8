"""
In-memory busy-calendar source.
"""

from datetime import date
from typing import Iterable, List, Tuple

from ..domain.models import DayAppointmentSet


def _day_key(value: date) -> Tuple[int, int, int]:
    # date and datetime values do not compare with each other
    return value.year, value.month, value.day


class InMemoryBusyCalendar:
    """
    Serves busy days from a list held in memory.

    Used when a party has no calendar file configured (no busy periods at
    all) and as a lightweight stand-in for real sources.
    """

    def __init__(self, days: Iterable[DayAppointmentSet] = ()):
        self._days = sorted(days, key=lambda day: _day_key(day.date))

    async def get_busy_days(
        self,
        start_date: date,
        end_date: date
    ) -> List[DayAppointmentSet]:
        """Return the stored busy days within ``[start_date, end_date]``."""
        first, last = _day_key(start_date), _day_key(end_date)
        return [
            day for day in self._days
            if first <= _day_key(day.date) <= last
        ]
