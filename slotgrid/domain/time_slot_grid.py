"""
Rasterising time periods onto a 288-cell grid (one cell per 5-minute slot).

What ``True`` means depends on the grid: for a weekly template day it means
"open for appointments", for a busy grid it means "no conflicting booking".
"""

from typing import Iterable, List, Sequence

from .models import TimePeriod
from .slot_index import SLOTS_PER_DAY, time_to_slot

Grid = List[bool]


def fill(value: bool) -> Grid:
    """Return a new grid with every slot set to ``value``."""
    return [value] * SLOTS_PER_DAY


def periods_to_grid(periods: Iterable[TimePeriod], mark_available: bool) -> Grid:
    """
    Build a grid from a list of periods.

    The background is ``not mark_available``; every period's
    ``[start, end)`` slots are set to ``mark_available``. Periods are applied
    in order, so a later period overwrites an earlier one where they overlap.

    Example:
        Open periods of a template day: ``periods_to_grid(open, True)``
        Busy periods of a calendar day: ``periods_to_grid(busy, False)``

    Raises:
        InvalidTime: If a period bound is not a valid HH:MM time
    """
    grid = fill(not mark_available)

    for period in periods:
        start_slot = time_to_slot(period.start)
        end_slot = time_to_slot(period.end)
        for slot in range(start_slot, end_slot):
            grid[slot] = mark_available

    return grid


def eligible_slot_indices(grid: Sequence[bool]) -> List[int]:
    """Return the indices of all ``True`` cells in ascending order."""
    return [index for index, eligible in enumerate(grid) if eligible]


def open_slot_count(grid: Sequence[bool]) -> int:
    return sum(1 for cell in grid if cell)
