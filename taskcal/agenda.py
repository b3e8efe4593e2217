from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Dict, Iterable, List, Optional, Tuple

from taskcal.buckets import add_days, to_local_datetime
from taskcal.grid import TodayArg, resolve_today
from taskcal.models import Priority, Task
from taskcal.task_index import TaskIndex, coerce_task


@dataclass(frozen=True)
class Agenda:
    overdue: Tuple[Task, ...] = ()
    today: Tuple[Task, ...] = ()
    upcoming: Tuple[Task, ...] = ()

    def __len__(self) -> int:
        return len(self.overdue) + len(self.today) + len(self.upcoming)


@dataclass(frozen=True)
class DaySummary:
    total: int = 0
    completed: int = 0
    pending: int = 0
    by_priority: Dict[str, int] = field(default_factory=dict)


def is_archived(task: Task) -> bool:
    return bool(task.payload.get("isArchived", task.payload.get("is_archived", False)))


def exclude_archived(tasks: Iterable[Any]) -> List[Task]:
    """Drop archived tasks. Callers opt in; the engine never filters on its own."""
    return [task for task in (coerce_task(item) for item in tasks) if not is_archived(task)]


def _iter_tasks(source) -> Iterable[Task]:
    if isinstance(source, TaskIndex):
        for _, items in source.items():
            yield from items
        return
    for item in source:
        yield coerce_task(item)


def build_agenda(
    source,
    today: TodayArg = None,
    horizon_days: int = 7,
    tz: Optional[tzinfo] = None,
) -> Agenda:
    """Pending tasks split into overdue, due today and due within ``horizon_days``.

    ``source`` is a task sequence or a :class:`TaskIndex`. Completed tasks are
    left out; each section is ordered by scheduled time.
    """
    if horizon_days < 0:
        raise ValueError("horizon_days must be >= 0")
    today_key = resolve_today(today, tz)
    horizon = add_days(today_key, horizon_days)
    sections: Dict[str, List[Tuple[Any, int, Task]]] = {"overdue": [], "today": [], "upcoming": []}
    for position, task in enumerate(_iter_tasks(source)):
        if task.is_completed:
            continue
        moment = to_local_datetime(task.date, tz)
        key = moment.date()
        if key < today_key.to_date():
            section = "overdue"
        elif key == today_key.to_date():
            section = "today"
        elif key <= horizon.to_date():
            section = "upcoming"
        else:
            continue
        sections[section].append((moment, position, task))

    def ordered(name):
        return tuple(task for _, _, task in sorted(sections[name], key=lambda row: row[:2]))

    return Agenda(overdue=ordered("overdue"), today=ordered("today"), upcoming=ordered("upcoming"))


def day_summary(tasks: Iterable[Any]) -> DaySummary:
    items = [coerce_task(item) for item in tasks]
    completed = sum(1 for task in items if task.is_completed)
    by_priority = {priority.label: 0 for priority in Priority}
    for task in items:
        by_priority[task.priority.label] += 1
    return DaySummary(
        total=len(items),
        completed=completed,
        pending=len(items) - completed,
        by_priority=by_priority,
    )
