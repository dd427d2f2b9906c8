"""
Conversion between wall-clock times and 5-minute slot indices.

A day is split into 288 slots of 5 minutes; slot 0 starts at 00:00 and
slot 287 starts at 23:55.
"""

import re
from datetime import date, datetime, time
from typing import Optional, Union

import pendulum
from pendulum import DateTime

from .exceptions import InvalidTime

SLOT_MINUTES = 5
SLOTS_PER_HOUR = 60 // SLOT_MINUTES
SLOTS_PER_DAY = 24 * SLOTS_PER_HOUR

_TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5][05])")

TimeValue = Union[str, time]


def time_to_slot(value: TimeValue) -> int:
    """
    Convert an ``HH:MM`` wall-clock time to its slot index.

    Args:
        value: ``HH:MM`` string (00:00-23:55, minutes a multiple of 5) or a
            ``datetime.time`` on a 5-minute boundary

    Returns:
        Slot index in ``[0, 288)``

    Raises:
        InvalidTime: If the value is not a valid 5-minute aligned time
    """
    if isinstance(value, time):
        if value.minute % SLOT_MINUTES or value.second or value.microsecond:
            raise InvalidTime(value)
        return value.hour * SLOTS_PER_HOUR + value.minute // SLOT_MINUTES

    if not isinstance(value, str):
        raise InvalidTime(value)

    match = _TIME_PATTERN.fullmatch(value)
    if not match:
        raise InvalidTime(value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    return hours * SLOTS_PER_HOUR + minutes // SLOT_MINUTES


def slot_to_time(
    index: int,
    reference_date: Union[date, datetime],
    timezone: Optional[str] = None
) -> DateTime:
    """
    Convert a slot index to an absolute date-time on ``reference_date``.

    A datetime reference keeps its own timezone and only has its clock
    replaced. A plain date is placed in ``timezone`` (UTC when omitted).

    Raises:
        ValueError: If the index is outside ``[0, 288)``. There is no
            wraparound into the next day.
    """
    if not 0 <= index < SLOTS_PER_DAY:
        raise ValueError(f"Slot index must be between 0 and {SLOTS_PER_DAY - 1}, got {index}")

    hour, slot_in_hour = divmod(index, SLOTS_PER_HOUR)
    minute = slot_in_hour * SLOT_MINUTES

    if isinstance(reference_date, datetime):
        return pendulum.instance(reference_date).set(
            hour=hour,
            minute=minute,
            second=0,
            microsecond=0
        )

    return pendulum.datetime(
        reference_date.year,
        reference_date.month,
        reference_date.day,
        hour,
        minute,
        tz=timezone or "UTC"
    )


def slot_to_label(index: int) -> str:
    """Return the ``HH:MM`` label of a slot."""
    if not 0 <= index < SLOTS_PER_DAY:
        raise ValueError(f"Slot index must be between 0 and {SLOTS_PER_DAY - 1}, got {index}")
    hour, slot_in_hour = divmod(index, SLOTS_PER_HOUR)
    return f"{hour:02d}:{slot_in_hour * SLOT_MINUTES:02d}"


def is_same_local_date(a: Union[date, datetime], b: Union[date, datetime]) -> bool:
    """Check whether two dates (or date-times) fall on the same local calendar day."""
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)
