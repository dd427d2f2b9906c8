"""
Chronological merge of two per-day busy-period sequences.
"""

from typing import List, Sequence

from .models import DayAppointmentSet
from .slot_index import is_same_local_date


def _day_key(day_set: DayAppointmentSet):
    day = day_set.date
    return (day.year, day.month, day.day)


def merge_day_appointment_sets(
    left: Sequence[DayAppointmentSet],
    right: Sequence[DayAppointmentSet]
) -> List[DayAppointmentSet]:
    """
    Merge two date-ordered busy sequences (e.g. provider and client).

    Both inputs must be ascending by date. Dates present on only one side are
    passed through; on a date present on both sides a new set is emitted whose
    busy periods are the left periods followed by the right periods. Periods
    are concatenated, not interval-merged.

    Neither input nor any of its elements is modified.

    Example:
        left:   [D1: 08:00-12:00]
        right:  [D1: 13:00-14:00, D2: 09:00-10:00]
        result: [D1: 08:00-12:00, 13:00-14:00; D2: 09:00-10:00]
    """
    if not left:
        return list(right)
    if not right:
        return list(left)

    merged: List[DayAppointmentSet] = []
    left_index = 0
    right_index = 0

    while left_index < len(left) and right_index < len(right):
        left_day = left[left_index]
        right_day = right[right_index]

        if is_same_local_date(left_day.date, right_day.date):
            merged.append(
                DayAppointmentSet(
                    date=left_day.date,
                    busy_periods=left_day.busy_periods + right_day.busy_periods
                )
            )
            left_index += 1
            right_index += 1
        elif _day_key(left_day) < _day_key(right_day):
            merged.append(left_day)
            left_index += 1
        else:
            merged.append(right_day)
            right_index += 1

    # One side is exhausted; the rest of the other side is already in order
    merged.extend(left[left_index:])
    merged.extend(right[right_index:])

    return merged
