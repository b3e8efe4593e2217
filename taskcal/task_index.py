from __future__ import annotations

import logging
from datetime import tzinfo
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from taskcal.buckets import DateBucketKey, to_bucket_key
from taskcal.errors import InvalidTimestamp
from taskcal.models import Task

logger = logging.getLogger(__name__)

ON_INVALID_RAISE = "raise"
ON_INVALID_SKIP = "skip"


def coerce_task(item: Any) -> Task:
    if isinstance(item, Task):
        return item
    if isinstance(item, Mapping):
        return Task.from_dict(item)
    raise TypeError(f"Expected Task or mapping, got {type(item).__name__}")


class TaskIndex:
    """Read-only snapshot of tasks grouped by local calendar day.

    Rebuild it whenever the source collection changes; there is no
    incremental update.
    """

    def __init__(
        self,
        buckets: Mapping[DateBucketKey, Tuple[Task, ...]],
        rejected: Tuple[Task, ...] = (),
    ):
        self._buckets = MappingProxyType(dict(buckets))
        self._size = sum(len(items) for items in self._buckets.values())
        self.rejected = tuple(rejected)

    @classmethod
    def build(
        cls,
        tasks: Iterable[Any],
        tz: Optional[tzinfo] = None,
        on_invalid: str = ON_INVALID_RAISE,
    ) -> "TaskIndex":
        if on_invalid not in {ON_INVALID_RAISE, ON_INVALID_SKIP}:
            raise ValueError(f"on_invalid must be 'raise' or 'skip', got {on_invalid!r}")
        grouped: Dict[DateBucketKey, List[Task]] = {}
        rejected: List[Task] = []
        for item in tasks:
            task = coerce_task(item)
            try:
                key = to_bucket_key(task.date, tz)
            except InvalidTimestamp:
                if on_invalid == ON_INVALID_RAISE:
                    raise
                logger.warning("Skipping task %r with invalid date %r", task.id, task.date)
                rejected.append(task)
                continue
            grouped.setdefault(key, []).append(task)
        index = cls({key: tuple(items) for key, items in grouped.items()}, rejected)
        logger.debug("Indexed %d tasks into %d day buckets", len(index), len(grouped))
        return index

    def tasks_on(self, key: Any) -> Tuple[Task, ...]:
        if not isinstance(key, DateBucketKey):
            key = to_bucket_key(key)
        return self._buckets.get(key, ())

    def count_on(self, key: Any) -> int:
        return len(self.tasks_on(key))

    def keys(self) -> List[DateBucketKey]:
        return sorted(self._buckets)

    def items(self) -> Iterator[Tuple[DateBucketKey, Tuple[Task, ...]]]:
        for key in self.keys():
            yield key, self._buckets[key]

    def __contains__(self, key: object) -> bool:
        return key in self._buckets

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"TaskIndex(tasks={self._size}, days={len(self._buckets)})"


EMPTY_INDEX = TaskIndex({})


def build(tasks: Iterable[Any], tz: Optional[tzinfo] = None, on_invalid: str = ON_INVALID_RAISE) -> TaskIndex:
    return TaskIndex.build(tasks, tz=tz, on_invalid=on_invalid)


def tasks_on(index: TaskIndex, key: Any) -> Tuple[Task, ...]:
    return index.tasks_on(key)
