"""
Orchestration of the matching engine over a sequence of days.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

import pendulum
from pendulum import DateTime

from ..domain.availability_matcher import AvailabilityMatcher, to_slot_constraints
from ..domain.calendar_merger import merge_day_appointment_sets
from ..domain.models import DayAppointmentSet
from ..domain.slot_index import slot_to_label, slot_to_time
from ..domain.time_slot_grid import eligible_slot_indices, periods_to_grid
from ..domain.weekly_template import WeeklyTemplate

logger = logging.getLogger(__name__)


class AppointmentRequestPlanner:
    """
    Turns a weekly template and two parties' busy days into eligible start times.

    Algorithm:
    1. Validate the (start boundary, duration) constraint once
    2. Merge provider and client busy days into one date-ordered sequence
    3. Per day: rasterise busy periods into a "free" grid, pick the template
       grid of that weekday as the "open" grid, run the matcher
    4. Convert every eligible slot to an absolute date-time

    Days are processed in ascending order and slots within a day ascending,
    so the result is ordered by date, then time of day.
    """

    def __init__(
        self,
        weekly_template: WeeklyTemplate,
        matcher: Optional[AvailabilityMatcher] = None,
        timezone: str = "UTC",
    ) -> None:
        self._weekly_template = weekly_template
        self._matcher = matcher or AvailabilityMatcher()
        self._timezone = timezone

    @property
    def weekly_template(self) -> WeeklyTemplate:
        return self._weekly_template

    def plan(
        self,
        provider_days: Sequence[DayAppointmentSet],
        client_days: Sequence[DayAppointmentSet],
        start_boundary_minutes: int,
        duration_minutes: int,
    ) -> List[DateTime]:
        """
        Find eligible start times on every date present in either busy sequence.

        Args:
            provider_days: Provider's busy days, ascending by date
            client_days: Client's busy days, ascending by date
            start_boundary_minutes: 5, 10, 15, 20, 30 or 60
            duration_minutes: Positive multiple of 5

        Returns:
            Eligible appointment start times, ascending
        """
        constraints = to_slot_constraints(start_boundary_minutes, duration_minutes)
        merged_days = merge_day_appointment_sets(provider_days, client_days)

        eligible_times: List[DateTime] = []
        for day in merged_days:
            eligible_times.extend(self._match_day(day, constraints))

        return eligible_times

    def plan_range(
        self,
        start_date: date,
        end_date: date,
        provider_days: Sequence[DayAppointmentSet],
        client_days: Sequence[DayAppointmentSet],
        start_boundary_minutes: int,
        duration_minutes: int,
    ) -> List[DateTime]:
        """
        Find eligible start times on every date of an inclusive date range.

        Dates without a busy entry count as completely free. Busy entries
        outside the range are ignored.
        """
        constraints = to_slot_constraints(start_boundary_minutes, duration_minutes)
        if end_date < start_date:
            raise ValueError(f"End date {end_date} is before start date {start_date}")

        merged_days = merge_day_appointment_sets(provider_days, client_days)
        busy_by_date: Dict[Tuple[int, int, int], DayAppointmentSet] = {
            (day.date.year, day.date.month, day.date.day): day
            for day in merged_days
        }

        eligible_times: List[DateTime] = []
        current = pendulum.date(start_date.year, start_date.month, start_date.day)
        last = pendulum.date(end_date.year, end_date.month, end_date.day)

        while current <= last:
            day = busy_by_date.get(
                (current.year, current.month, current.day),
                DayAppointmentSet(date=current),
            )
            eligible_times.extend(self._match_day(day, constraints))
            current = current.add(days=1)

        return eligible_times

    def _match_day(
        self,
        day: DayAppointmentSet,
        constraints: Tuple[int, int],
    ) -> List[DateTime]:
        """Run the matcher for a single day and convert the hits to date-times."""
        start_boundary_modulo, duration_slot_count = constraints

        open_grid = self._weekly_template.grid_for_date(day.date)
        free_grid = periods_to_grid(day.busy_periods, mark_available=False)

        start_grid = self._matcher.find_start_grid(
            open_grid,
            free_grid,
            start_boundary_modulo,
            duration_slot_count,
        )

        slots = eligible_slot_indices(start_grid)
        logger.debug(
            "%s: %d busy period(s), %d eligible start(s)",
            day.date.isoformat(),
            len(day.busy_periods),
            len(slots),
        )

        eligible_times: List[DateTime] = []
        for slot in slots:
            start = slot_to_time(slot, day.date, self._timezone)
            if start.format("HH:mm") != slot_to_label(slot):
                # Wall-clock time skipped by a daylight-saving transition
                logger.debug(
                    "%s: %s does not exist in %s",
                    day.date.isoformat(),
                    slot_to_label(slot),
                    self._timezone,
                )
                continue
            eligible_times.append(start)

        return eligible_times
