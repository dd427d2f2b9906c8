"""
Domain models for busy periods and per-day appointment sets.
"""

from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Iterable, Sequence, Tuple


@dataclass(frozen=True)
class TimePeriod:
    """
    A wall-clock period within one day, as HH:MM strings.

    The period covers ``[start, end)``. Well-formedness is checked when the
    period is rasterised onto a grid, not on construction.
    """
    start: str
    end: str

    @classmethod
    def from_pair(cls, pair: Sequence[str]) -> "TimePeriod":
        """Build a period from a ``[start, end]`` pair."""
        if len(pair) != 2:
            raise ValueError(f"Time period must be a [start, end] pair, got {pair!r}")
        start, end = pair
        return cls(start=start, end=end)

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass(frozen=True)
class DayAppointmentSet:
    """
    Busy periods already booked on a single calendar date.

    ``busy_periods`` is always stored as a tuple so instances never share a
    mutable list with whoever built them.
    """
    date: date_type
    busy_periods: Tuple[TimePeriod, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "busy_periods", tuple(self.busy_periods))

    @classmethod
    def from_pairs(
        cls,
        day: date_type,
        pairs: Iterable[Sequence[str]]
    ) -> "DayAppointmentSet":
        """Build a set from raw ``[start, end]`` pairs."""
        return cls(
            date=day,
            busy_periods=tuple(TimePeriod.from_pair(pair) for pair in pairs)
        )
