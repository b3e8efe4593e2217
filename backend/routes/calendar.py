from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from backend.auth import require_backend_token
from backend.schemas import (
    AgendaRequest,
    AgendaResponse,
    DayRequest,
    DayResponse,
    GridRequest,
    GridResponse,
    NavigateRequest,
    NavigateResponse,
    SwipeRequest,
    SwipeResponse,
    TaskIn,
)
from backend.settings import get_settings
from taskcal import agenda, gestures, grid, labels
from taskcal.buckets import to_bucket_key, today_key
from taskcal.models import Task, WeekStart
from taskcal.navigation import NavigationState
from taskcal.task_index import ON_INVALID_RAISE, ON_INVALID_SKIP, TaskIndex

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_backend_token)])


def _to_tasks(items: list[TaskIn]) -> list[Task]:
    return [Task.from_dict(item.model_dump(by_alias=True)) for item in items]


def _serialize_task(task: Task) -> dict:
    return task.to_dict()


def _serialize_day(day, preview_limit: int | None) -> dict:
    tasks = day.tasks
    hidden = 0
    if preview_limit is not None:
        tasks, hidden = grid.cell_preview(day, preview_limit)
    return {
        "date": day.date.isoformat(),
        "in_current_period": day.in_current_period,
        "is_today": day.is_today,
        "is_selected": day.is_selected,
        "tasks": [_serialize_task(task) for task in tasks],
        "hidden_count": hidden,
    }


def _today(value, settings):
    if value is not None:
        return to_bucket_key(value, settings.tzinfo)
    return today_key(settings.tzinfo)


def _range_payload(first, last) -> dict:
    return {"start": first.isoformat(), "end": last.isoformat()}


@router.post("/v1/calendar/grid", response_model=GridResponse)
async def calendar_grid(payload: GridRequest):
    settings = get_settings()
    week_starts_on = payload.week_starts_on or settings.week_starts_on
    anchor = to_bucket_key(payload.anchor, settings.tzinfo)
    on_invalid = ON_INVALID_SKIP if payload.skip_invalid else ON_INVALID_RAISE
    index = TaskIndex.build(_to_tasks(payload.tasks), tz=settings.tzinfo, on_invalid=on_invalid)
    cells = grid.build_grid(
        payload.view,
        anchor,
        week_starts_on,
        index,
        payload.selected_date,
        _today(payload.today, settings),
        tz=settings.tzinfo,
    )
    first, last = grid.visible_range(payload.view, anchor, week_starts_on)
    logger.debug("Built %s grid for %s with %d cells", payload.view, anchor, len(cells))
    return {
        "view": payload.view,
        "anchor": anchor.isoformat(),
        "label": labels.period_label(payload.view, anchor, week_starts_on),
        "week_starts_on": WeekStart(week_starts_on).value,
        "range": _range_payload(first, last),
        "weekdays": labels.weekday_headers(week_starts_on),
        "weeks": [[_serialize_day(day, payload.preview_limit) for day in row] for row in grid.weeks(cells)],
        "rejected": [task.id for task in index.rejected],
    }


@router.post("/v1/calendar/navigate", response_model=NavigateResponse)
async def calendar_navigate(payload: NavigateRequest):
    settings = get_settings()
    if payload.state is None:
        state = NavigationState.initial(
            today=_today(payload.today, settings),
            view=settings.default_view,
            week_starts_on=settings.week_starts_on,
        )
    else:
        state = NavigationState.from_dict(payload.state.model_dump())

    action = payload.action
    if action == "next":
        state = state.next()
    elif action == "previous":
        state = state.previous()
    elif action == "today":
        state = state.go_to_today(_today(payload.today, settings))
    elif action == "toggle_view":
        state = state.toggle_view()
    elif action == "set_view":
        state = state.set_view(payload.view or settings.default_view)
    elif action == "select":
        state = state.select_date(payload.date, settings.tzinfo)
    elif action == "go_to_month":
        year = payload.year if payload.year is not None else state.anchor_date.year
        month = payload.month if payload.month is not None else state.anchor_date.month
        state = state.go_to_month(year, month)

    first, last = state.visible_range()
    return {
        "state": state.to_dict(),
        "label": labels.period_label(state.view, state.anchor_date, state.week_starts_on),
        "range": _range_payload(first, last),
    }


@router.post("/v1/calendar/swipe", response_model=SwipeResponse)
async def calendar_swipe(payload: SwipeRequest):
    threshold = payload.threshold
    if threshold is None:
        threshold = get_settings().swipe_threshold
    intent = gestures.interpret(payload.start_x, payload.start_y, payload.end_x, payload.end_y, threshold)
    return {"intent": intent}


@router.post("/v1/calendar/agenda", response_model=AgendaResponse)
async def calendar_agenda(payload: AgendaRequest):
    settings = get_settings()
    tasks = _to_tasks(payload.tasks)
    if not payload.include_archived:
        tasks = agenda.exclude_archived(tasks)
    horizon = payload.horizon_days if payload.horizon_days is not None else settings.agenda_horizon_days
    today = _today(payload.today, settings)
    result = agenda.build_agenda(tasks, today=today, horizon_days=horizon, tz=settings.tzinfo)
    return {
        "today": today.isoformat(),
        "overdue": [_serialize_task(task) for task in result.overdue],
        "due_today": [_serialize_task(task) for task in result.today],
        "upcoming": [_serialize_task(task) for task in result.upcoming],
    }


@router.post("/v1/calendar/day", response_model=DayResponse)
async def calendar_day(payload: DayRequest):
    settings = get_settings()
    key = to_bucket_key(payload.date, settings.tzinfo)
    index = TaskIndex.build(_to_tasks(payload.tasks), tz=settings.tzinfo)
    day_tasks = index.tasks_on(key)
    summary = agenda.day_summary(day_tasks)
    return {
        "date": key.isoformat(),
        "heading": labels.day_heading(key),
        "tasks": [_serialize_task(task) for task in day_tasks],
        "summary": {
            "total": summary.total,
            "completed": summary.completed,
            "pending": summary.pending,
            "by_priority": summary.by_priority,
        },
    }
