from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Tuple, Union

if TYPE_CHECKING:
    from taskcal.buckets import DateBucketKey


Timestamp = Union[str, datetime, date, int, float]


class Priority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    URGENT = 4

    @property
    def label(self) -> str:
        return self.name.title()

    @classmethod
    def parse(cls, value: Any) -> "Priority":
        if isinstance(value, Priority):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                return cls.MEDIUM
        text = str(value or "").strip().upper()
        if text.isdigit():
            return cls.parse(int(text))
        return cls.__members__.get(text, cls.MEDIUM)


class View(str, Enum):
    MONTH = "month"
    WEEK = "week"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            text = value.strip().lower()
            for member in cls:
                if member.value == text:
                    return member
        return None

    def toggled(self) -> "View":
        return View.WEEK if self is View.MONTH else View.MONTH


class WeekStart(str, Enum):
    MON = "mon"
    SUN = "sun"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            text = value.strip().lower()[:3]
            for member in cls:
                if member.value == text:
                    return member
        return None

    @property
    def first_weekday(self) -> int:
        # datetime.weekday() numbering: Monday == 0.
        return 0 if self is WeekStart.MON else 6


_TASK_FIELDS = {
    "id",
    "date",
    "priority",
    "isCompleted",
    "is_completed",
}


@dataclass(frozen=True)
class Task:
    """A scheduled task occurrence as seen by the calendar engine.

    Only ``date`` is interpreted; ``payload`` carries title, tags, category
    and anything else the task service sends, untouched.
    """

    id: Any
    date: Timestamp
    priority: Priority = Priority.MEDIUM
    is_completed: bool = False
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Task":
        completed = data.get("isCompleted", data.get("is_completed", False))
        payload = {key: value for key, value in data.items() if key not in _TASK_FIELDS}
        return cls(
            id=data.get("id"),
            date=data.get("date"),
            priority=Priority.parse(data.get("priority")),
            is_completed=bool(completed),
            payload=MappingProxyType(payload),
        )

    def to_dict(self) -> dict:
        item = dict(self.payload)
        date_value = self.date
        if isinstance(date_value, (datetime, date)):
            date_value = date_value.isoformat()
        item.update(
            {
                "id": self.id,
                "date": date_value,
                "priority": int(self.priority),
                "isCompleted": self.is_completed,
            }
        )
        return item

    @property
    def title(self) -> str:
        return str(self.payload.get("title") or "")


@dataclass(frozen=True)
class CalendarDay:
    date: "DateBucketKey"
    in_current_period: bool
    is_today: bool
    is_selected: bool
    tasks: Tuple[Task, ...] = ()
