from datetime import date

import pytest

from taskcal import task_index
from taskcal.buckets import DateBucketKey
from taskcal.errors import InvalidTimestamp
from taskcal.models import Priority, Task
from taskcal.task_index import TaskIndex


def test_same_day_tasks_share_a_bucket(march_tasks):
    index = TaskIndex.build(march_tasks)

    ids = [task.id for task in index.tasks_on(DateBucketKey(2024, 3, 15))]

    assert ids == [1, 2]


def test_every_task_lands_in_exactly_one_bucket(march_tasks):
    index = TaskIndex.build(march_tasks)

    total = sum(index.count_on(key) for key in index.keys())

    assert total == len(march_tasks) == len(index)
    seen = [task.id for key in index.keys() for task in index.tasks_on(key)]
    assert sorted(seen) == sorted(task.id for task in march_tasks)


def test_empty_day_returns_empty_sequence(march_tasks):
    index = TaskIndex.build(march_tasks)

    assert index.tasks_on(DateBucketKey(2024, 3, 16)) == ()
    assert DateBucketKey(2024, 3, 16) not in index


def test_empty_collection():
    index = TaskIndex.build([])

    assert len(index) == 0
    assert index.keys() == []
    assert index.tasks_on(DateBucketKey(2024, 1, 1)) == ()


def test_insertion_order_is_kept_within_a_bucket():
    tasks = [
        Task(id="b", date="2024-03-15T18:00:00"),
        Task(id="a", date="2024-03-15T07:00:00"),
        Task(id="c", date="2024-03-15T12:00:00"),
    ]

    index = TaskIndex.build(tasks)

    assert [task.id for task in index.tasks_on(DateBucketKey(2024, 3, 15))] == ["b", "a", "c"]


def test_building_twice_gives_identical_answers(march_tasks):
    first = TaskIndex.build(march_tasks)
    second = TaskIndex.build(march_tasks)

    assert first.keys() == second.keys()
    for key in first.keys():
        assert first.tasks_on(key) == second.tasks_on(key)


def test_invalid_date_is_raised_not_dropped():
    tasks = [Task(id=1, date="2024-03-15T10:00:00"), Task(id=2, date="garbage")]

    with pytest.raises(InvalidTimestamp) as excinfo:
        TaskIndex.build(tasks)

    assert excinfo.value.value == "garbage"


def test_skip_mode_records_rejected_tasks():
    tasks = [Task(id=1, date="2024-03-15T10:00:00"), Task(id=2, date="")]

    index = TaskIndex.build(tasks, on_invalid="skip")

    assert len(index) == 1
    assert [task.id for task in index.rejected] == [2]


def test_unknown_on_invalid_mode_is_rejected():
    with pytest.raises(ValueError):
        TaskIndex.build([], on_invalid="ignore")


def test_accepts_task_dicts():
    index = TaskIndex.build(
        [
            {"id": 7, "date": "2024-03-15T09:00:00Z", "priority": 4, "isCompleted": True, "title": "Ship"},
        ]
    )

    (task,) = [task for key in index.keys() for task in index.tasks_on(key)]
    assert task.priority is Priority.URGENT
    assert task.is_completed is True
    assert task.title == "Ship"


def test_rejects_non_task_items():
    with pytest.raises(TypeError):
        TaskIndex.build([42])


def test_lookup_accepts_plain_dates(march_tasks):
    index = TaskIndex.build(march_tasks)

    assert len(index.tasks_on(date(2024, 3, 15))) == 2


def test_module_level_helpers(march_tasks):
    index = task_index.build(march_tasks)

    assert task_index.tasks_on(index, DateBucketKey(2024, 4, 2))[0].id == 5


def test_snapshot_cannot_be_mutated(march_tasks):
    index = TaskIndex.build(march_tasks)
    bucket = index.tasks_on(DateBucketKey(2024, 3, 15))

    with pytest.raises(AttributeError):
        bucket.append(Task(id=99, date="2024-03-15"))
