from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import tzinfo
from typing import Optional

from taskcal.buckets import (
    DateBucketKey,
    add_weeks,
    days_in_month,
    to_bucket_key,
)
from taskcal.grid import TodayArg, build_grid, resolve_today, visible_range
from taskcal.models import View, WeekStart
from taskcal.task_index import TaskIndex

INTENT_PREVIOUS = "previous"
INTENT_NEXT = "next"
INTENT_TODAY = "today"
INTENT_NONE = "none"


@dataclass(frozen=True)
class NavigationState:
    """Anchor, selection and view of one calendar presenter.

    Every transition returns a new state; instances are never mutated, so a
    presenter can compare old and new values to decide what to re-render.

    ``preferred_day`` remembers the day of month the anchor was last set to
    explicitly. Month steps clamp to it (Jan 31 -> Feb 29 -> Mar 31), which
    keeps ``previous()`` an exact inverse of ``next()``.
    """

    anchor_date: DateBucketKey
    selected_date: Optional[DateBucketKey] = None
    view: View = View.MONTH
    week_starts_on: WeekStart = WeekStart.MON
    preferred_day: Optional[int] = field(default=None, repr=False)

    def __post_init__(self):
        anchor = to_bucket_key(self.anchor_date)
        object.__setattr__(self, "anchor_date", anchor)
        if self.selected_date is not None:
            object.__setattr__(self, "selected_date", to_bucket_key(self.selected_date))
        object.__setattr__(self, "view", View(self.view))
        object.__setattr__(self, "week_starts_on", WeekStart(self.week_starts_on))
        preferred = self.preferred_day
        if preferred is None or min(preferred, days_in_month(anchor.year, anchor.month)) != anchor.day:
            preferred = anchor.day
        object.__setattr__(self, "preferred_day", preferred)

    @classmethod
    def initial(
        cls,
        today: TodayArg = None,
        view="month",
        week_starts_on="mon",
        select_today: bool = False,
        tz: Optional[tzinfo] = None,
    ) -> "NavigationState":
        anchor = resolve_today(today, tz)
        return cls(
            anchor_date=anchor,
            selected_date=anchor if select_today else None,
            view=view,
            week_starts_on=week_starts_on,
        )

    def _move_to(self, anchor: DateBucketKey, **changes) -> "NavigationState":
        return replace(self, anchor_date=anchor, preferred_day=None, **changes)

    def _step(self, n: int) -> "NavigationState":
        if self.view is View.WEEK:
            return self._move_to(add_weeks(self.anchor_date, n))
        total = self.anchor_date.year * 12 + (self.anchor_date.month - 1) + n
        year, month_index = divmod(total, 12)
        month = month_index + 1
        day = min(self.preferred_day, days_in_month(year, month))
        return replace(self, anchor_date=DateBucketKey(year, month, day))

    def next(self) -> "NavigationState":
        return self._step(1)

    def previous(self) -> "NavigationState":
        return self._step(-1)

    def go_to_today(self, today: TodayArg = None, tz: Optional[tzinfo] = None) -> "NavigationState":
        key = resolve_today(today, tz)
        return self._move_to(key, selected_date=key)

    def toggle_view(self) -> "NavigationState":
        return replace(self, view=self.view.toggled())

    def set_view(self, view) -> "NavigationState":
        view = View(view)
        if view is self.view:
            return self
        return replace(self, view=view)

    def select_date(self, value, tz: Optional[tzinfo] = None) -> "NavigationState":
        key = to_bucket_key(value, tz)
        first, last = self.visible_range()
        if first <= key <= last:
            return replace(self, selected_date=key)
        return self._move_to(key, selected_date=key)

    def go_to_month(self, year: int, month: int) -> "NavigationState":
        return self._move_to(DateBucketKey(year, month, 1))

    def apply(self, intent: str, today: TodayArg = None, tz: Optional[tzinfo] = None) -> "NavigationState":
        if intent == INTENT_NEXT:
            return self.next()
        if intent == INTENT_PREVIOUS:
            return self.previous()
        if intent == INTENT_TODAY:
            return self.go_to_today(today, tz)
        return self

    def visible_range(self):
        return visible_range(self.view, self.anchor_date, self.week_starts_on)

    def grid(self, task_index: Optional[TaskIndex] = None, today: TodayArg = None, tz: Optional[tzinfo] = None):
        return build_grid(
            self.view,
            self.anchor_date,
            self.week_starts_on,
            task_index,
            self.selected_date,
            today,
            tz,
        )

    def to_dict(self) -> dict:
        return {
            "anchor_date": self.anchor_date.isoformat(),
            "selected_date": self.selected_date.isoformat() if self.selected_date else None,
            "view": self.view.value,
            "week_starts_on": self.week_starts_on.value,
            "preferred_day": self.preferred_day,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NavigationState":
        return cls(
            anchor_date=data["anchor_date"],
            selected_date=data.get("selected_date"),
            view=data.get("view") or View.MONTH,
            week_starts_on=data.get("week_starts_on") or WeekStart.MON,
            preferred_day=data.get("preferred_day"),
        )
