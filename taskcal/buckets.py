from __future__ import annotations

import calendar
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Optional

from taskcal.errors import InvalidTimestamp
from taskcal.models import WeekStart


@dataclass(frozen=True, order=True)
class DateBucketKey:
    """A local calendar day, the unit tasks are grouped by."""

    year: int
    month: int
    day: int

    def __post_init__(self):
        try:
            date(self.year, self.month, self.day)
        except (TypeError, ValueError) as exc:
            raise InvalidTimestamp((self.year, self.month, self.day), str(exc)) from exc

    @classmethod
    def from_date(cls, value: date) -> "DateBucketKey":
        return cls(value.year, value.month, value.day)

    @classmethod
    def parse(cls, value: str) -> "DateBucketKey":
        try:
            return cls.from_date(date.fromisoformat(str(value).strip()))
        except ValueError as exc:
            raise InvalidTimestamp(value, "expected YYYY-MM-DD") from exc

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def weekday(self) -> int:
        return self.to_date().weekday()

    def __str__(self) -> str:
        return self.isoformat()


_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})[.,](\d+)")


def _parse_string(value: str) -> datetime | date:
    text = value.strip()
    if not text or text.lower() in {"nan", "null", "none", "invalid date"}:
        raise InvalidTimestamp(value)
    if len(text) == 10:
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidTimestamp(value) from exc
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fraction digits (.NET sends 7).
    text = _FRACTION.sub(lambda match: f"{match.group(1)}.{match.group(2)[:6].ljust(6, '0')}", text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidTimestamp(value) from exc


def _from_epoch(value: float, tz: Optional[tzinfo]) -> datetime:
    if not math.isfinite(value):
        raise InvalidTimestamp(value, "not a finite number")
    try:
        if tz is None:
            return datetime.fromtimestamp(value)
        return datetime.fromtimestamp(value, tz)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidTimestamp(value, str(exc)) from exc


def to_local_datetime(timestamp: Any, tz: Optional[tzinfo] = None) -> datetime:
    """Parse ``timestamp`` into a naive local datetime.

    Aware datetimes (and ISO strings with an offset) are converted to ``tz``,
    or to the system local zone when ``tz`` is None. Naive values and
    date-only strings are taken as already local; dates become midnight.
    """
    if isinstance(timestamp, DateBucketKey):
        return datetime.combine(timestamp.to_date(), time.min)
    if isinstance(timestamp, bool) or timestamp is None:
        raise InvalidTimestamp(timestamp)
    if isinstance(timestamp, (int, float)):
        value: Any = _from_epoch(float(timestamp), tz)
    elif isinstance(timestamp, str):
        value = _parse_string(timestamp)
    elif isinstance(timestamp, (datetime, date)):
        value = timestamp
    else:
        raise InvalidTimestamp(timestamp, f"unsupported type {type(timestamp).__name__}")

    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None and value.utcoffset() is not None:
        value = value.astimezone(tz) if tz is not None else value.astimezone()
    return value.replace(tzinfo=None)


def to_bucket_key(timestamp: Any, tz: Optional[tzinfo] = None) -> DateBucketKey:
    """Truncate ``timestamp`` to the local calendar day it falls on."""
    if isinstance(timestamp, DateBucketKey):
        return timestamp
    value = to_local_datetime(timestamp, tz)
    return DateBucketKey(value.year, value.month, value.day)


def compare(a: DateBucketKey, b: DateBucketKey) -> int:
    if a == b:
        return 0
    return -1 if a < b else 1


def add_days(key: DateBucketKey, n: int) -> DateBucketKey:
    try:
        return DateBucketKey.from_date(key.to_date() + timedelta(days=n))
    except OverflowError as exc:
        raise InvalidTimestamp(key, f"{n:+d} days is outside the supported range") from exc


def add_weeks(key: DateBucketKey, n: int) -> DateBucketKey:
    return add_days(key, 7 * n)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(key: DateBucketKey, n: int) -> DateBucketKey:
    # Day is clamped to the target month, so Jan 31 + 1 lands on Feb 28/29.
    total = key.year * 12 + (key.month - 1) + n
    year, month_index = divmod(total, 12)
    month = month_index + 1
    return DateBucketKey(year, month, min(key.day, days_in_month(year, month)))


def start_of_month(key: DateBucketKey) -> DateBucketKey:
    return DateBucketKey(key.year, key.month, 1)


def end_of_month(key: DateBucketKey) -> DateBucketKey:
    return DateBucketKey(key.year, key.month, days_in_month(key.year, key.month))


def start_of_week(key: DateBucketKey, week_starts_on="mon") -> DateBucketKey:
    first = WeekStart(week_starts_on).first_weekday
    return add_days(key, -((key.weekday() - first) % 7))


def end_of_week(key: DateBucketKey, week_starts_on="mon") -> DateBucketKey:
    return add_days(start_of_week(key, week_starts_on), 6)


def today_key(tz: Optional[tzinfo] = None) -> DateBucketKey:
    return DateBucketKey.from_date(datetime.now(tz).date())
