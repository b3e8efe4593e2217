from __future__ import annotations

import os

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from taskcal.settings import CalendarSettings


class Settings(CalendarSettings):
    backend_log_level: str = Field("INFO", alias="BACKEND_LOG_LEVEL")
    backend_session_secret: str | None = Field(None, alias="BACKEND_SESSION_SECRET")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @property
    def token_required(self) -> bool:
        return bool(self.backend_session_secret)


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None


# For local dev convenience only.
if os.getenv("BACKEND_DEBUG_SETTINGS"):
    print(get_settings())
