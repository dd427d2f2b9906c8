"""
Core business logic for finding appointment start slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

from typing import Sequence, Tuple

from .exceptions import InvalidArraySize, InvalidDuration, InvalidStartBoundary
from .slot_index import SLOT_MINUTES, SLOTS_PER_DAY
from .time_slot_grid import Grid, fill

# Slot modulo for starts every 5, 10, 15, 20, 30 or 60 minutes.
ALLOWED_START_BOUNDARY_MODULOS = (1, 2, 3, 4, 6, 12)
ALLOWED_START_BOUNDARY_MINUTES = tuple(
    modulo * SLOT_MINUTES for modulo in ALLOWED_START_BOUNDARY_MODULOS
)


def to_slot_constraints(
    start_boundary_minutes: int,
    duration_minutes: int
) -> Tuple[int, int]:
    """
    Convert a (start boundary, duration) pair in minutes to slot counts.

    Returns:
        ``(start_boundary_modulo, duration_slot_count)``

    Raises:
        InvalidStartBoundary: If the boundary is not 5, 10, 15, 20, 30 or 60
        InvalidDuration: If the duration is not a positive multiple of 5
    """
    if (
        not isinstance(start_boundary_minutes, int)
        or isinstance(start_boundary_minutes, bool)
        or start_boundary_minutes not in ALLOWED_START_BOUNDARY_MINUTES
    ):
        raise InvalidStartBoundary(start_boundary_minutes, ALLOWED_START_BOUNDARY_MINUTES)

    if (
        not isinstance(duration_minutes, int)
        or isinstance(duration_minutes, bool)
        or duration_minutes <= 0
        or duration_minutes % SLOT_MINUTES
    ):
        raise InvalidDuration(duration_minutes)

    return start_boundary_minutes // SLOT_MINUTES, duration_minutes // SLOT_MINUTES


class AvailabilityMatcher:
    """
    Finds the slots at which an appointment may start on one day.

    Algorithm:
    1. Only slots on the start boundary (``i % modulo == 0``) are candidates
    2. A candidate must be both open (template) and free (no busy period)
    3. The whole ``[i, i + duration)`` window must be open and free and lie
       within the day; appointments never run past 23:55 into the next day
    4. Every candidate is judged on its own, so a long open block yields
       every boundary-aligned start inside it, overlapping ones included
    """

    def find_start_grid(
        self,
        open_grid: Sequence[bool],
        free_grid: Sequence[bool],
        start_boundary_modulo: int,
        duration_slot_count: int
    ) -> Grid:
        """
        Compute the grid of valid appointment start slots.

        Args:
            open_grid: True where the template allows appointments
            free_grid: True where no busy period conflicts
            start_boundary_modulo: 1, 2, 3, 4, 6 or 12 (every 5 ... 60 minutes)
            duration_slot_count: Number of 5-minute slots the appointment needs

        Returns:
            New 288-cell grid; True at ``i`` means an appointment may start at slot ``i``

        Raises:
            InvalidArraySize: If either grid does not have 288 cells
            InvalidStartBoundary: If the modulo is not an allowed value
            InvalidDuration: If the slot count is not positive
        """
        self._validate(open_grid, free_grid, start_boundary_modulo, duration_slot_count)

        start_grid = fill(False)

        for slot in range(0, SLOTS_PER_DAY, start_boundary_modulo):
            if not (open_grid[slot] and free_grid[slot]):
                continue

            if self._window_is_available(open_grid, free_grid, slot, duration_slot_count):
                start_grid[slot] = True

        return start_grid

    @staticmethod
    def _window_is_available(
        open_grid: Sequence[bool],
        free_grid: Sequence[bool],
        start_slot: int,
        duration_slot_count: int
    ) -> bool:
        """Check that every slot of the appointment window is open and free."""
        end_slot = start_slot + duration_slot_count

        if end_slot > SLOTS_PER_DAY:
            return False

        for slot in range(start_slot, end_slot):
            if not (open_grid[slot] and free_grid[slot]):
                # Not enough contiguous slots for the full duration
                return False

        return True

    @staticmethod
    def _validate(
        open_grid: Sequence[bool],
        free_grid: Sequence[bool],
        start_boundary_modulo: int,
        duration_slot_count: int
    ) -> None:
        for grid in (open_grid, free_grid):
            if len(grid) != SLOTS_PER_DAY:
                raise InvalidArraySize(len(grid), SLOTS_PER_DAY)

        if (
            not isinstance(start_boundary_modulo, int)
            or isinstance(start_boundary_modulo, bool)
            or start_boundary_modulo not in ALLOWED_START_BOUNDARY_MODULOS
        ):
            raise InvalidStartBoundary(start_boundary_modulo, ALLOWED_START_BOUNDARY_MODULOS)

        if (
            not isinstance(duration_slot_count, int)
            or isinstance(duration_slot_count, bool)
            or duration_slot_count <= 0
        ):
            raise InvalidDuration(duration_slot_count)
