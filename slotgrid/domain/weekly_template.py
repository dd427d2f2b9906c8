"""
Recurring weekly availability template.
"""

from datetime import date
from typing import Iterable, Sequence, Tuple

from .models import TimePeriod
from .slot_index import SLOT_MINUTES
from .time_slot_grid import Grid, open_slot_count, periods_to_grid

DAYS_PER_WEEK = 7

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def weekday_index(day: date) -> int:
    """Return the weekday of ``day`` with 0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % DAYS_PER_WEEK


class WeeklyTemplate:
    """
    Seven open-time grids, one per weekday, index 0 = Sunday.

    Each day is rasterised once on construction; the template is read-only
    afterwards and can be shared between any number of matching calls.
    """

    def __init__(self, week: Sequence[Iterable[TimePeriod]]):
        if len(week) != DAYS_PER_WEEK:
            raise ValueError(
                f"Weekly template needs exactly {DAYS_PER_WEEK} days (Sunday first), got {len(week)}"
            )

        self._periods: Tuple[Tuple[TimePeriod, ...], ...] = tuple(
            tuple(day) for day in week
        )
        self._grids: Tuple[Tuple[bool, ...], ...] = tuple(
            tuple(periods_to_grid(day, mark_available=True))
            for day in self._periods
        )

    @classmethod
    def from_pairs(cls, week: Sequence[Iterable[Sequence[str]]]) -> "WeeklyTemplate":
        """
        Build a template from raw ``[start, end]`` pairs.

        Example:
            ``[[], [["08:00", "12:00"], ["13:00", "17:00"]], ...]``
        """
        return cls([
            [TimePeriod.from_pair(pair) for pair in day]
            for day in week
        ])

    def grid_for_weekday(self, weekday: int) -> Grid:
        """Return a fresh copy of the open grid for a weekday (0 = Sunday)."""
        return list(self._grids[weekday])

    def grid_for_date(self, day: date) -> Grid:
        return self.grid_for_weekday(weekday_index(day))

    def periods_for_weekday(self, weekday: int) -> Tuple[TimePeriod, ...]:
        return self._periods[weekday]

    def is_closed(self, weekday: int) -> bool:
        """Check whether no slot at all is open on a weekday."""
        return open_slot_count(self._grids[weekday]) == 0

    def open_minutes(self, weekday: int) -> int:
        """Total open minutes on a weekday."""
        return open_slot_count(self._grids[weekday]) * SLOT_MINUTES

