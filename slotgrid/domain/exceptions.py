"""
Domain-specific exception hierarchy for the scheduling engine.

Every error carries the offending value so callers can react to it
programmatically instead of parsing the message text.
"""

from typing import Any


class SchedulingError(Exception):
    """Base class for all application-level errors."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class InvalidTime(SchedulingError):
    """Raised when a wall-clock time is not a 5-minute aligned HH:MM value."""

    def __init__(self, value: Any):
        super().__init__(
            f"Invalid time {value!r}: expected HH:MM (00:00-23:55) in 5-minute steps",
            value,
        )


class InvalidArraySize(SchedulingError):
    """Raised when a time slot grid does not cover exactly one day."""

    def __init__(self, value: int, expected: int):
        super().__init__(
            f"Time slot grid must have {expected} cells. It has {value}.",
            value,
        )


class InvalidStartBoundary(SchedulingError):
    """Raised when the appointment start boundary is not an allowed value."""

    def __init__(self, value: Any, allowed: Any):
        super().__init__(
            f"Start boundary must be one of {allowed}. It is {value!r}.",
            value,
        )


class InvalidDuration(SchedulingError):
    """Raised when the appointment duration is not a positive multiple of 5 minutes."""

    def __init__(self, value: Any):
        super().__init__(f"Invalid appointment duration: {value!r}", value)


class CalendarSourceError(SchedulingError):
    """Raised when busy-period data cannot be loaded or parsed."""
