from __future__ import annotations

from datetime import date, tzinfo
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from taskcal.buckets import (
    DateBucketKey,
    add_days,
    end_of_month,
    end_of_week,
    start_of_month,
    start_of_week,
    to_bucket_key,
    today_key,
)
from taskcal.models import CalendarDay, Task, View, WeekStart
from taskcal.task_index import EMPTY_INDEX, TaskIndex

TodayArg = Union[DateBucketKey, date, Callable[[], Any], None]

Grid = Tuple[CalendarDay, ...]


def resolve_today(today: TodayArg, tz: Optional[tzinfo] = None) -> DateBucketKey:
    if today is None:
        return today_key(tz)
    if callable(today):
        today = today()
    return to_bucket_key(today, tz)


def _resolve_key(value: Any, tz: Optional[tzinfo] = None) -> Optional[DateBucketKey]:
    if value is None:
        return None
    return to_bucket_key(value, tz)


def visible_range(view, anchor, week_starts_on="mon") -> Tuple[DateBucketKey, DateBucketKey]:
    """First and last day (inclusive) shown by a grid of ``view`` around ``anchor``."""
    anchor = to_bucket_key(anchor)
    week_start = WeekStart(week_starts_on)
    if View(view) is View.WEEK:
        return start_of_week(anchor, week_start), end_of_week(anchor, week_start)
    return (
        start_of_week(start_of_month(anchor), week_start),
        end_of_week(end_of_month(anchor), week_start),
    )


def _build_cells(first, last, in_period, task_index, selected, today) -> Grid:
    cells: List[CalendarDay] = []
    current = first
    while current <= last:
        cells.append(
            CalendarDay(
                date=current,
                in_current_period=in_period(current),
                is_today=current == today,
                is_selected=selected is not None and current == selected,
                tasks=task_index.tasks_on(current),
            )
        )
        current = add_days(current, 1)
    return tuple(cells)


def build_month_grid(
    anchor,
    week_starts_on="mon",
    task_index: Optional[TaskIndex] = None,
    selected_date=None,
    today: TodayArg = None,
    tz: Optional[tzinfo] = None,
) -> Grid:
    """Cells for the minimal run of whole weeks covering ``anchor``'s month.

    Neighbouring-month days are included with ``in_current_period=False``
    and still carry their own tasks. Timestamps given for ``anchor`` and
    ``selected_date`` are read in ``tz``, like task dates in the index.
    """
    anchor = to_bucket_key(anchor, tz)
    first, last = visible_range(View.MONTH, anchor, week_starts_on)
    return _build_cells(
        first,
        last,
        lambda key: key.year == anchor.year and key.month == anchor.month,
        task_index if task_index is not None else EMPTY_INDEX,
        _resolve_key(selected_date, tz),
        resolve_today(today, tz),
    )


def build_week_grid(
    anchor,
    week_starts_on="mon",
    task_index: Optional[TaskIndex] = None,
    selected_date=None,
    today: TodayArg = None,
    tz: Optional[tzinfo] = None,
) -> Grid:
    anchor = to_bucket_key(anchor, tz)
    first, last = visible_range(View.WEEK, anchor, week_starts_on)
    return _build_cells(
        first,
        last,
        lambda key: True,
        task_index if task_index is not None else EMPTY_INDEX,
        _resolve_key(selected_date, tz),
        resolve_today(today, tz),
    )


def build_grid(
    view,
    anchor,
    week_starts_on="mon",
    task_index: Optional[TaskIndex] = None,
    selected_date=None,
    today: TodayArg = None,
    tz: Optional[tzinfo] = None,
) -> Grid:
    builder = build_week_grid if View(view) is View.WEEK else build_month_grid
    return builder(anchor, week_starts_on, task_index, selected_date, today, tz)


def weeks(grid: Sequence[CalendarDay]) -> List[Tuple[CalendarDay, ...]]:
    return [tuple(grid[offset : offset + 7]) for offset in range(0, len(grid), 7)]


def cell_preview(day: CalendarDay, limit: int = 2) -> Tuple[Tuple[Task, ...], int]:
    if limit < 0:
        raise ValueError("limit must be >= 0")
    shown = day.tasks[:limit]
    return shown, len(day.tasks) - len(shown)
