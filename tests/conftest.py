from __future__ import annotations

import pytest

from taskcal.buckets import DateBucketKey
from taskcal.models import Priority, Task

CALENDAR_ENV_KEYS = [
    "CALENDAR_WEEK_STARTS_ON",
    "CALENDAR_SWIPE_THRESHOLD",
    "CALENDAR_DEFAULT_VIEW",
    "CALENDAR_TIMEZONE",
    "CALENDAR_AGENDA_HORIZON_DAYS",
    "CALENDAR_CELL_PREVIEW_LIMIT",
    "BACKEND_LOG_LEVEL",
    "BACKEND_SESSION_SECRET",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in CALENDAR_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fixed_today() -> DateBucketKey:
    return DateBucketKey(2024, 3, 15)


@pytest.fixture
def march_tasks() -> list[Task]:
    return [
        Task(id=1, date="2024-03-15T23:59:00", priority=Priority.HIGH, payload={"title": "Late review"}),
        Task(id=2, date="2024-03-15T00:01:00", priority=Priority.LOW, payload={"title": "Early run"}),
        Task(id=3, date="2024-03-01T09:00:00", is_completed=True, payload={"title": "Rent"}),
        Task(id=4, date="2024-02-27T10:00:00", priority=Priority.URGENT, payload={"title": "Taxes"}),
        Task(id=5, date="2024-04-02T08:30:00", payload={"title": "Dentist"}),
    ]
