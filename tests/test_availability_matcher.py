"""
Tests for the availability matcher.
"""

import pytest

from slotgrid.domain.availability_matcher import AvailabilityMatcher, to_slot_constraints
from slotgrid.domain.exceptions import InvalidArraySize, InvalidDuration, InvalidStartBoundary
from slotgrid.domain.models import TimePeriod
from slotgrid.domain.slot_index import SLOTS_PER_DAY, slot_to_label, time_to_slot
from slotgrid.domain.time_slot_grid import eligible_slot_indices, fill, periods_to_grid

VALID_GRID = fill(True)
INVALID_GRID = [True] * 10

OPEN_DAY = periods_to_grid(
    [TimePeriod("08:00", "12:00"), TimePeriod("13:00", "17:00")],
    mark_available=True,
)


def _labels(grid):
    return [slot_to_label(slot) for slot in eligible_slot_indices(grid)]


class TestValidation:
    """Tests for argument validation."""

    def test_invalid_open_grid_size(self):
        """Test an open grid of the wrong size is rejected."""
        with pytest.raises(InvalidArraySize) as exc_info:
            AvailabilityMatcher().find_start_grid(INVALID_GRID, VALID_GRID, 2, 4)

        assert exc_info.value.value == 10

    def test_invalid_free_grid_size(self):
        """Test a free grid of the wrong size is rejected."""
        with pytest.raises(InvalidArraySize):
            AvailabilityMatcher().find_start_grid(VALID_GRID, INVALID_GRID, 2, 4)

    @pytest.mark.parametrize("modulo", [0, 5, 7, 24, -1])
    def test_invalid_start_boundary(self, modulo):
        """Test a start modulo outside 1, 2, 3, 4, 6, 12 is rejected."""
        with pytest.raises(InvalidStartBoundary) as exc_info:
            AvailabilityMatcher().find_start_grid(VALID_GRID, VALID_GRID, modulo, 4)

        assert exc_info.value.value == modulo

    @pytest.mark.parametrize("duration", [0, -3])
    def test_invalid_duration(self, duration):
        """Test a non-positive duration is rejected."""
        with pytest.raises(InvalidDuration):
            AvailabilityMatcher().find_start_grid(VALID_GRID, VALID_GRID, 2, duration)

    def test_bool_is_not_an_integer_argument(self):
        """Test True is not accepted as modulo 1 or as a one-slot duration."""
        with pytest.raises(InvalidStartBoundary):
            AvailabilityMatcher().find_start_grid(VALID_GRID, VALID_GRID, True, 1)

        with pytest.raises(InvalidDuration):
            AvailabilityMatcher().find_start_grid(VALID_GRID, VALID_GRID, 1, True)


class TestFindStartGrid:
    """Tests for AvailabilityMatcher.find_start_grid."""

    def test_open_day_without_busy_periods(self):
        """Test hourly appointments every 30 minutes in two open blocks."""
        result = AvailabilityMatcher().find_start_grid(OPEN_DAY, fill(True), 6, 12)

        assert len(result) == SLOTS_PER_DAY
        assert _labels(result) == [
            "08:00", "08:30", "09:00", "09:30", "10:00", "10:30", "11:00",
            "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00",
        ]

    def test_busy_period_blocks_overlapping_windows(self):
        """Test starts whose window touches a busy period are excluded."""
        free = periods_to_grid([TimePeriod("09:00", "10:00")], mark_available=False)

        result = AvailabilityMatcher().find_start_grid(OPEN_DAY, free, 6, 12)

        labels = _labels(result)
        assert labels[:4] == ["08:00", "10:00", "10:30", "11:00"]
        assert "08:30" not in labels
        assert "09:00" not in labels
        assert "09:30" not in labels
        assert labels[4:] == [
            "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00",
        ]

    def test_boundary_filtering(self):
        """Test no slot off the start boundary is ever eligible."""
        for modulo in (1, 2, 3, 4, 6, 12):
            result = AvailabilityMatcher().find_start_grid(VALID_GRID, VALID_GRID, modulo, 1)

            assert eligible_slot_indices(result) == list(range(0, SLOTS_PER_DAY, modulo))

    def test_no_spill_past_midnight(self):
        """Test an appointment may not run into the next day."""
        result = AvailabilityMatcher().find_start_grid(VALID_GRID, VALID_GRID, 1, 12)

        slots = eligible_slot_indices(result)
        assert slots[-1] == time_to_slot("23:00")
        assert len(slots) == SLOTS_PER_DAY - 11

    def test_duration_longer_than_open_block(self):
        """Test no start is found when no block is long enough."""
        result = AvailabilityMatcher().find_start_grid(OPEN_DAY, fill(True), 1, 49)

        assert eligible_slot_indices(result) == []

    def test_start_must_be_open_and_free(self):
        """Test a start slot that is open but busy is not eligible."""
        free = fill(True)
        free[time_to_slot("08:00")] = False

        result = AvailabilityMatcher().find_start_grid(OPEN_DAY, free, 12, 1)

        assert "08:00" not in _labels(result)
        assert "09:00" in _labels(result)

    def test_inputs_are_not_modified(self):
        """Test the matcher only reads its input grids."""
        open_grid = list(OPEN_DAY)
        free_grid = fill(True)

        AvailabilityMatcher().find_start_grid(open_grid, free_grid, 6, 12)

        assert open_grid == OPEN_DAY
        assert free_grid == fill(True)


class TestToSlotConstraints:
    """Tests for to_slot_constraints."""

    @pytest.mark.parametrize(
        "boundary, duration, expected",
        [
            (5, 5, (1, 1)),
            (15, 45, (3, 9)),
            (30, 60, (6, 12)),
            (60, 120, (12, 24)),
        ],
    )
    def test_valid_constraints(self, boundary, duration, expected):
        """Test minutes convert to slot counts."""
        assert to_slot_constraints(boundary, duration) == expected

    @pytest.mark.parametrize("boundary", [0, 25, 45, 90, 30.0])
    def test_invalid_boundary(self, boundary):
        """Test unsupported boundaries are rejected."""
        with pytest.raises(InvalidStartBoundary):
            to_slot_constraints(boundary, 60)

    @pytest.mark.parametrize("duration", [0, -30, 7, 62])
    def test_invalid_duration(self, duration):
        """Test durations that are not positive multiples of 5 are rejected."""
        with pytest.raises(InvalidDuration) as exc_info:
            to_slot_constraints(30, duration)

        assert exc_info.value.value == duration

    def test_bool_minutes_are_rejected(self):
        """Test booleans are rejected for both boundary and duration."""
        with pytest.raises(InvalidStartBoundary):
            to_slot_constraints(True, 60)

        with pytest.raises(InvalidDuration):
            to_slot_constraints(30, False)
