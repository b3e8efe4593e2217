from __future__ import annotations

from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskcal.models import View, WeekStart


class CalendarSettings(BaseSettings):
    week_starts_on: WeekStart = Field(WeekStart.MON, alias="CALENDAR_WEEK_STARTS_ON")
    swipe_threshold: float = Field(50, ge=0, alias="CALENDAR_SWIPE_THRESHOLD")
    default_view: View = Field(View.MONTH, alias="CALENDAR_DEFAULT_VIEW")
    timezone: str | None = Field(None, alias="CALENDAR_TIMEZONE")
    agenda_horizon_days: int = Field(7, ge=0, alias="CALENDAR_AGENDA_HORIZON_DAYS")
    cell_preview_limit: int = Field(2, ge=0, alias="CALENDAR_CELL_PREVIEW_LIMIT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value):
        if value is None or not str(value).strip():
            return None
        try:
            ZoneInfo(str(value).strip())
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone {value!r}") from exc
        return str(value).strip()

    @property
    def tzinfo(self) -> tzinfo | None:
        if not self.timezone:
            return None
        return ZoneInfo(self.timezone)


_settings: CalendarSettings | None = None


def get_calendar_settings() -> CalendarSettings:
    global _settings
    if _settings is None:
        _settings = CalendarSettings()
    return _settings


def reset_calendar_settings() -> None:
    global _settings
    _settings = None
