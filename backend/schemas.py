from __future__ import annotations

import datetime as dt
from typing import Optional, List, Dict, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class TaskIn(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Any
    date: Union[str, float, int]
    priority: Union[int, str] = 2
    is_completed: bool = Field(False, alias="isCompleted")


class TaskOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Any
    date: Any
    priority: int
    isCompleted: bool


class CalendarDayOut(BaseModel):
    date: str
    in_current_period: bool
    is_today: bool
    is_selected: bool
    tasks: List[TaskOut]
    hidden_count: int = 0


class GridRequest(BaseModel):
    tasks: List[TaskIn] = Field(default_factory=list)
    anchor: str
    view: Literal["month", "week"] = "month"
    week_starts_on: Optional[Literal["mon", "sun"]] = None
    selected_date: Optional[str] = None
    today: Optional[dt.date] = None
    preview_limit: Optional[int] = Field(None, ge=0)
    skip_invalid: bool = False


class GridResponse(BaseModel):
    view: str
    anchor: str
    label: str
    week_starts_on: str
    range: Dict[str, str]
    weekdays: List[str]
    weeks: List[List[CalendarDayOut]]
    rejected: List[Any] = Field(default_factory=list)


class NavigationStateModel(BaseModel):
    anchor_date: str
    selected_date: Optional[str] = None
    view: Literal["month", "week"] = "month"
    week_starts_on: Literal["mon", "sun"] = "mon"
    preferred_day: Optional[int] = None


class NavigateRequest(BaseModel):
    state: Optional[NavigationStateModel] = None
    action: Literal["next", "previous", "today", "toggle_view", "select", "go_to_month", "set_view", "none"]
    date: Optional[str] = None
    year: Optional[int] = None
    month: Optional[int] = Field(None, ge=1, le=12)
    view: Optional[Literal["month", "week"]] = None
    today: Optional[dt.date] = None


class NavigateResponse(BaseModel):
    state: NavigationStateModel
    label: str
    range: Dict[str, str]


class SwipeRequest(BaseModel):
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    threshold: Optional[float] = Field(None, ge=0)


class SwipeResponse(BaseModel):
    intent: Literal["previous", "next", "none"]


class AgendaRequest(BaseModel):
    tasks: List[TaskIn] = Field(default_factory=list)
    today: Optional[dt.date] = None
    horizon_days: Optional[int] = Field(None, ge=0)
    include_archived: bool = False


class AgendaResponse(BaseModel):
    today: str
    overdue: List[TaskOut]
    due_today: List[TaskOut]
    upcoming: List[TaskOut]


class DayRequest(BaseModel):
    tasks: List[TaskIn] = Field(default_factory=list)
    date: str


class DaySummaryOut(BaseModel):
    total: int
    completed: int
    pending: int
    by_priority: Dict[str, int]


class DayResponse(BaseModel):
    date: str
    heading: str
    tasks: List[TaskOut]
    summary: DaySummaryOut
