"""
Busy-calendar source backed by a JSON file.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

import pendulum
from pendulum import Date, DateTime

from ..domain.calendar_merger import merge_day_appointment_sets
from ..domain.exceptions import CalendarSourceError, InvalidTime
from ..domain.models import DayAppointmentSet
from ..domain.slot_index import time_to_slot

logger = logging.getLogger(__name__)


class JsonBusyCalendar:
    """
    Loads busy days from a JSON file.

    The file holds a list of day entries with local wall-clock periods that
    are already clipped to their date:

        [
            {"date": "2024-11-25", "busyPeriods": [["08:00", "12:00"]]},
            {"date": "2024-11-26", "busyPeriods": [["13:00", "14:00"]]}
        ]

    Entries may appear in any order and a date may appear more than once;
    ``get_busy_days`` always returns one entry per date, ascending.
    """

    def __init__(self, path: Path):
        """
        Initialize the calendar source.

        Args:
            path: Path to the JSON busy-period file

        Raises:
            FileNotFoundError: If the file doesn't exist
            CalendarSourceError: If the file is not valid JSON
        """
        self.path = Path(path)
        self._entries = self._load_entries()

    def _load_entries(self) -> List[Dict[str, Any]]:
        """Load raw day entries from the JSON file."""
        if not self.path.exists():
            raise FileNotFoundError(f"Busy calendar file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise CalendarSourceError(f"Invalid JSON in {self.path}: {exc}", str(self.path)) from exc

        if not isinstance(data, list):
            raise CalendarSourceError(
                f"Busy calendar file must contain a list of day entries: {self.path}",
                str(self.path),
            )

        return data

    async def get_busy_days(
        self,
        start_date: date,
        end_date: date
    ) -> List[DayAppointmentSet]:
        """
        Return the busy days within ``[start_date, end_date]``.

        Args:
            start_date: First day of the window
            end_date: Last day of the window (inclusive)

        Returns:
            One DayAppointmentSet per busy date, ascending by date
        """
        days: List[DayAppointmentSet] = []
        first = (start_date.year, start_date.month, start_date.day)
        last = (end_date.year, end_date.month, end_date.day)

        for entry in self._entries:
            try:
                day = self._parse_entry(entry)
            except (KeyError, TypeError, ValueError, InvalidTime) as e:
                logger.warning("Skipping invalid busy entry in %s: %s", self.path, e)
                continue

            if first <= (day.date.year, day.date.month, day.date.day) <= last:
                days.append(day)

        days.sort(key=lambda d: d.date)

        # Collapse repeated dates into a single entry
        combined: List[DayAppointmentSet] = []
        for day in days:
            if combined and combined[-1].date == day.date:
                combined[-1:] = merge_day_appointment_sets(combined[-1:], [day])
            else:
                combined.append(day)

        return combined

    @staticmethod
    def _parse_entry(entry: Dict[str, Any]) -> DayAppointmentSet:
        day = pendulum.parse(entry["date"], exact=True)
        if not isinstance(day, Date) or isinstance(day, DateTime):
            raise ValueError(f"Not a calendar date: {entry['date']!r}")

        day_set = DayAppointmentSet.from_pairs(day, entry.get("busyPeriods", []))
        for period in day_set.busy_periods:
            time_to_slot(period.start)
            time_to_slot(period.end)

        return day_set
