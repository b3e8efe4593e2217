from __future__ import annotations

from typing import Any


class CalendarError(Exception):
    """Base class for calendar engine errors."""


class InvalidTimestamp(CalendarError, ValueError):
    def __init__(self, value: Any, reason: str | None = None):
        self.value = value
        self.reason = reason or "cannot be parsed to a calendar date"
        super().__init__(f"Invalid timestamp {value!r}: {self.reason}")
