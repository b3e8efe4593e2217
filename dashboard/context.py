from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List

from taskcal.agenda import exclude_archived
from taskcal.buckets import DateBucketKey, today_key
from taskcal.models import Task
from taskcal.settings import CalendarSettings


@dataclass
class DashboardContext:
    """Dependencies handed to every tab.

    ``today`` and ``load_tasks`` are injectable so a presenter never reads the
    wall clock or the network on its own. ``load_tasks(start, end)`` receives
    the inclusive day range a tab needs; either bound may be None.
    """

    settings: CalendarSettings
    load_tasks: Callable[..., Iterable[Task]]
    today: Callable[[], DateBucketKey] = None
    hide_archived: bool = True
    touch_navigation: bool = True
    extras: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.today is None:
            self.today = lambda: today_key(self.settings.tzinfo)

    def exclude_archived(self, tasks: Iterable[Task]) -> List[Task]:
        return exclude_archived(tasks)

    def get(self, key, default=None):
        if hasattr(self, key):
            return getattr(self, key)
        return self.extras.get(key, default)

    def __getitem__(self, key):
        if hasattr(self, key):
            return getattr(self, key)
        return self.extras[key]
