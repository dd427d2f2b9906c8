"""
Tests for the AvailabilityService orchestration layer.
"""

import asyncio
from datetime import date, datetime
from typing import Dict, List

import pendulum

from slotgrid.adapters.memory_calendar import InMemoryBusyCalendar
from slotgrid.domain.models import DayAppointmentSet
from slotgrid.domain.weekly_template import WeeklyTemplate
from slotgrid.services.appointment_planner import AppointmentRequestPlanner
from slotgrid.services.availability_service import AvailabilityService

WORKING_WEEK = [[]] + [[["09:00", "17:00"]] for _ in range(5)] + [[]]


class StubBusyCalendar:
    """Minimal stub matching BusyCalendarProtocol."""

    def __init__(self, days: List[DayAppointmentSet]):
        self._days = days
        self.calls: List[Dict[str, str]] = []

    async def get_busy_days(self, start_date, end_date):
        self.calls.append(
            {
                "start": start_date.isoformat(),
                "end": end_date.isoformat(),
            }
        )
        return self._days


def _build_service(provider_days, client_days) -> AvailabilityService:
    planner = AppointmentRequestPlanner(
        weekly_template=WeeklyTemplate.from_pairs(WORKING_WEEK),
        timezone="Europe/Berlin",
    )
    return AvailabilityService(
        provider_calendar=StubBusyCalendar(provider_days),
        client_calendar=StubBusyCalendar(client_days),
        planner=planner,
    )


def test_fetch_busy_days_queries_both_calendars():
    """Both calendars should be asked for the same window."""
    service = _build_service([], [])

    asyncio.run(
        service.fetch_busy_days(
            start_date=date(2024, 11, 25),
            end_date=date(2024, 11, 29),
        )
    )

    expected = [{"start": "2024-11-25", "end": "2024-11-29"}]
    assert service._provider_calendar.calls == expected
    assert service._client_calendar.calls == expected


def test_fetch_busy_days_sorts_unordered_sources():
    """Busy days returned out of order should be sorted by date."""
    days = [
        DayAppointmentSet.from_pairs(date(2024, 11, 27), [["09:00", "10:00"]]),
        DayAppointmentSet.from_pairs(date(2024, 11, 25), [["09:00", "10:00"]]),
    ]
    service = _build_service(days, [])

    provider_days, client_days = asyncio.run(
        service.fetch_busy_days(
            start_date=date(2024, 11, 25),
            end_date=date(2024, 11, 29),
        )
    )

    assert [day.date for day in provider_days] == [date(2024, 11, 25), date(2024, 11, 27)]
    assert client_days == []


def test_find_eligible_times_uses_both_parties():
    """End-to-end call should respect provider and client busy periods."""
    provider = [DayAppointmentSet.from_pairs(date(2024, 11, 25), [["09:00", "11:00"]])]
    client = [DayAppointmentSet.from_pairs(date(2024, 11, 25), [["12:00", "16:00"]])]
    service = _build_service(provider, client)

    times = asyncio.run(
        service.find_eligible_times(
            start_date=date(2024, 11, 25),
            end_date=date(2024, 11, 25),
            start_boundary_minutes=60,
            duration_minutes=60,
        )
    )

    assert [t.format("HH:mm") for t in times] == ["11:00", "16:00"]
    assert times[0] == pendulum.parse("2024-11-25 11:00", tz="Europe/Berlin")


def test_in_memory_calendar_filters_window():
    """The in-memory source only returns days inside the window."""
    calendar = InMemoryBusyCalendar(
        [
            DayAppointmentSet(date=date(2024, 11, 30)),
            DayAppointmentSet(date=date(2024, 11, 24)),
            DayAppointmentSet(date=date(2024, 11, 26)),
        ]
    )

    days = asyncio.run(calendar.get_busy_days(date(2024, 11, 25), date(2024, 11, 29)))

    assert [day.date for day in days] == [date(2024, 11, 26)]


def test_in_memory_calendar_accepts_mixed_date_types():
    """Dates and date-times can be stored side by side and are ordered by day."""
    calendar = InMemoryBusyCalendar(
        [
            DayAppointmentSet(date=pendulum.datetime(2024, 11, 27, 9, 0, tz="Europe/Berlin")),
            DayAppointmentSet(date=date(2024, 11, 25)),
            DayAppointmentSet(date=datetime(2024, 11, 26, 14, 30)),
            DayAppointmentSet(date=date(2024, 12, 2)),
        ]
    )

    days = asyncio.run(
        calendar.get_busy_days(pendulum.datetime(2024, 11, 25, 12, 0), date(2024, 11, 29))
    )

    assert [(d.date.year, d.date.month, d.date.day) for d in days] == [
        (2024, 11, 25),
        (2024, 11, 26),
        (2024, 11, 27),
    ]
