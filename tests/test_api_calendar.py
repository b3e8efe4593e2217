import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from backend.settings import reset_settings

TASKS = [
    {"id": 1, "date": "2024-03-15T23:59:00", "priority": 3, "title": "Late review"},
    {"id": 2, "date": "2024-03-15T00:01:00", "priority": 1, "title": "Early run"},
    {"id": 3, "date": "2024-03-15T12:00:00", "isCompleted": True, "title": "Lunch"},
    {"id": 4, "date": "2024-02-27T10:00:00", "priority": 4, "title": "Taxes"},
    {"id": 5, "date": "2024-03-20T08:00:00", "title": "Dentist", "isArchived": True},
]


@pytest.fixture
def client(clean_env):
    reset_settings()
    with TestClient(create_app()) as test_client:
        yield test_client
    reset_settings()


@pytest.fixture
def secured_client(clean_env, monkeypatch):
    monkeypatch.setenv("BACKEND_SESSION_SECRET", "s3cret")
    reset_settings()
    with TestClient(create_app()) as test_client:
        yield test_client
    reset_settings()


def _all_days(body):
    return [day for row in body["weeks"] for day in row]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_month_grid(client):
    response = client.post(
        "/v1/calendar/grid",
        json={"tasks": TASKS, "anchor": "2024-02-01", "today": "2024-02-14"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["label"] == "February 2024"
    assert body["range"] == {"start": "2024-01-29", "end": "2024-03-03"}
    assert body["weekdays"][0] == "Mon"
    assert len(body["weeks"]) == 5
    days = {day["date"]: day for day in _all_days(body)}
    assert [task["id"] for task in days["2024-02-27"]["tasks"]] == [4]
    assert days["2024-02-14"]["is_today"] is True
    assert days["2024-03-01"]["in_current_period"] is False


def test_grid_preview_limit(client):
    response = client.post(
        "/v1/calendar/grid",
        json={"tasks": TASKS, "anchor": "2024-03-15", "view": "week", "preview_limit": 2, "today": "2024-03-15"},
    )

    body = response.json()
    friday = next(day for day in _all_days(body) if day["date"] == "2024-03-15")
    assert len(body["weeks"]) == 1
    assert [task["id"] for task in friday["tasks"]] == [1, 2]
    assert friday["hidden_count"] == 1
    assert friday["tasks"][0]["title"] == "Late review"


def test_grid_rejects_invalid_task_date(client):
    tasks = TASKS + [{"id": 9, "date": "not a date"}]

    response = client.post("/v1/calendar/grid", json={"tasks": tasks, "anchor": "2024-03-01"})

    assert response.status_code == 422
    assert "not a date" in response.json()["detail"]


def test_grid_can_skip_invalid_task_dates(client):
    tasks = TASKS + [{"id": 9, "date": "not a date"}]

    response = client.post(
        "/v1/calendar/grid",
        json={"tasks": tasks, "anchor": "2024-03-01", "skip_invalid": True, "today": "2024-03-15"},
    )

    assert response.status_code == 200
    assert response.json()["rejected"] == [9]


def test_grid_rejects_invalid_anchor(client):
    response = client.post("/v1/calendar/grid", json={"anchor": "NaN"})

    assert response.status_code == 422


def test_navigate_next_then_toggle(client):
    state = {"anchor_date": "2024-01-15", "view": "month"}

    advanced = client.post("/v1/calendar/navigate", json={"state": state, "action": "next"}).json()
    toggled = client.post(
        "/v1/calendar/navigate",
        json={"state": advanced["state"], "action": "toggle_view"},
    ).json()

    assert advanced["state"]["anchor_date"] == "2024-02-15"
    assert advanced["label"] == "February 2024"
    assert toggled["state"]["view"] == "week"
    assert toggled["state"]["anchor_date"] == "2024-02-15"
    assert toggled["range"] == {"start": "2024-02-12", "end": "2024-02-18"}


def test_navigate_without_state_starts_at_today(client):
    body = client.post("/v1/calendar/navigate", json={"action": "none", "today": "2024-03-15"}).json()

    assert body["state"]["anchor_date"] == "2024-03-15"
    assert body["state"]["view"] == "month"
    assert body["state"]["week_starts_on"] == "mon"


def test_navigate_select_and_month_jump(client):
    state = {"anchor_date": "2024-03-01"}

    selected = client.post("/v1/calendar/navigate", json={"state": state, "action": "select", "date": "2024-03-20"}).json()
    jumped = client.post(
        "/v1/calendar/navigate",
        json={"state": state, "action": "go_to_month", "year": 2025, "month": 7},
    ).json()

    assert selected["state"]["selected_date"] == "2024-03-20"
    assert selected["state"]["anchor_date"] == "2024-03-01"
    assert jumped["state"]["anchor_date"] == "2025-07-01"


def test_navigate_rejects_unknown_action(client):
    response = client.post("/v1/calendar/navigate", json={"action": "sideways"})

    assert response.status_code == 422


def test_swipe(client):
    response = client.post("/v1/calendar/swipe", json={"start_x": 100, "start_y": 100, "end_x": 40, "end_y": 105})

    assert response.json() == {"intent": "next"}


def test_swipe_uses_configured_threshold(clean_env, monkeypatch):
    monkeypatch.setenv("CALENDAR_SWIPE_THRESHOLD", "80")
    reset_settings()
    try:
        with TestClient(create_app()) as test_client:
            response = test_client.post(
                "/v1/calendar/swipe",
                json={"start_x": 100, "start_y": 100, "end_x": 40, "end_y": 105},
            )
    finally:
        reset_settings()

    assert response.json() == {"intent": "none"}


def test_agenda_hides_archived_by_default(client):
    body = client.post("/v1/calendar/agenda", json={"tasks": TASKS, "today": "2024-03-15"}).json()

    assert body["today"] == "2024-03-15"
    assert [task["id"] for task in body["overdue"]] == [4]
    assert [task["id"] for task in body["due_today"]] == [2, 1]
    assert body["upcoming"] == []


def test_agenda_can_include_archived(client):
    body = client.post(
        "/v1/calendar/agenda",
        json={"tasks": TASKS, "today": "2024-03-15", "include_archived": True},
    ).json()

    assert [task["id"] for task in body["upcoming"]] == [5]


def test_day_detail(client):
    body = client.post("/v1/calendar/day", json={"tasks": TASKS, "date": "2024-03-15"}).json()

    assert body["heading"] == "Tasks for Fri Mar 15 2024"
    assert [task["id"] for task in body["tasks"]] == [1, 2, 3]
    assert body["summary"]["total"] == 3
    assert body["summary"]["completed"] == 1
    assert body["summary"]["by_priority"]["High"] == 1


def test_token_is_required_when_secret_configured(secured_client):
    denied = secured_client.post("/v1/calendar/swipe", json={"start_x": 0, "start_y": 0, "end_x": 0, "end_y": 0})
    allowed = secured_client.post(
        "/v1/calendar/swipe",
        json={"start_x": 0, "start_y": 0, "end_x": 0, "end_y": 0},
        headers={"X-Backend-Token": "s3cret"},
    )

    assert denied.status_code == 401
    assert allowed.status_code == 200
    assert secured_client.get("/health").status_code == 200


def test_selection_and_tasks_share_the_configured_zone(clean_env, monkeypatch):
    monkeypatch.setenv("CALENDAR_TIMEZONE", "Asia/Tokyo")
    stamp = "2024-03-15T20:00:00Z"
    reset_settings()
    try:
        with TestClient(create_app()) as test_client:
            grid_body = test_client.post(
                "/v1/calendar/grid",
                json={
                    "tasks": [{"id": 1, "date": stamp}],
                    "anchor": "2024-03-16",
                    "view": "week",
                    "selected_date": stamp,
                    "today": "2024-03-16",
                },
            ).json()
            nav_body = test_client.post(
                "/v1/calendar/navigate",
                json={"state": {"anchor_date": "2024-03-01"}, "action": "select", "date": stamp},
            ).json()
    finally:
        reset_settings()

    days = _all_days(grid_body)
    assert [day["date"] for day in days if day["tasks"]] == ["2024-03-16"]
    assert [day["date"] for day in days if day["is_selected"]] == ["2024-03-16"]
    assert nav_body["state"]["selected_date"] == "2024-03-16"
