"""
Application service for finding appointment start times for two parties.

The service fetches the provider's and the client's busy days through
calendar source adapters and delegates the matching to the
``AppointmentRequestPlanner``. This keeps the CLI thin and lets tests swap
the calendar sources for simple stubs via a protocol.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import List, Protocol, Sequence, Tuple

from pendulum import DateTime

from ..domain.models import DayAppointmentSet
from .appointment_planner import AppointmentRequestPlanner

logger = logging.getLogger(__name__)


class BusyCalendarProtocol(Protocol):
    """Protocol describing the busy-calendar behaviour needed by the service."""

    async def get_busy_days(
        self,
        start_date: date,
        end_date: date,
    ) -> List[DayAppointmentSet]:
        """Return busy days in the window, ascending by date."""


class AvailabilityService:
    """
    Orchestrates busy-day retrieval and appointment planning.
    """

    def __init__(
        self,
        provider_calendar: BusyCalendarProtocol,
        client_calendar: BusyCalendarProtocol,
        planner: AppointmentRequestPlanner,
    ) -> None:
        self._provider_calendar = provider_calendar
        self._client_calendar = client_calendar
        self._planner = planner

    async def find_eligible_times(
        self,
        *,
        start_date: date,
        end_date: date,
        start_boundary_minutes: int,
        duration_minutes: int,
    ) -> List[DateTime]:
        """
        Retrieve both parties' busy days and compute eligible start times.
        """
        provider_days, client_days = await self.fetch_busy_days(
            start_date=start_date,
            end_date=end_date,
        )

        return self._planner.plan_range(
            start_date,
            end_date,
            provider_days,
            client_days,
            start_boundary_minutes,
            duration_minutes,
        )

    async def fetch_busy_days(
        self,
        *,
        start_date: date,
        end_date: date,
    ) -> Tuple[List[DayAppointmentSet], List[DayAppointmentSet]]:
        """Fetch provider and client busy days concurrently."""
        provider_days, client_days = await asyncio.gather(
            self._provider_calendar.get_busy_days(start_date, end_date),
            self._client_calendar.get_busy_days(start_date, end_date),
        )

        logger.info(
            "Loaded %d provider and %d client busy day(s) for %s..%s",
            len(provider_days),
            len(client_days),
            start_date.isoformat(),
            end_date.isoformat(),
        )

        return self._sorted(provider_days), self._sorted(client_days)

    @staticmethod
    def _sorted(days: Sequence[DayAppointmentSet]) -> List[DayAppointmentSet]:
        """
        Ensure busy days are in ascending date order.

        The merge step relies on ordered input; sources that return days in
        arbitrary order are normalised here.
        """
        return sorted(days, key=lambda day: (day.date.year, day.date.month, day.date.day))
