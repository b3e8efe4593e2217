import os

import streamlit as st

from dashboard.context import DashboardContext
from dashboard.data import api_client
from dashboard.logging_config import configure_logging
from dashboard.router import render_router
from dashboard.styles import inject_calendar_css
from taskcal.settings import get_calendar_settings


ENV_PATH = os.path.join(os.path.dirname(__file__), ".env")

ENV_FALLBACK_KEYS = {
    ("tasks", "API_BASE_URL"): "TASKS_API_BASE_URL",
    ("tasks", "API_TOKEN"): "TASKS_API_TOKEN",
}


def load_local_env():
    if not os.path.exists(ENV_PATH):
        return
    with open(ENV_PATH, "r", encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    try:
        current = st.secrets
        for key in path:
            if key not in current:
                return default
            current = current[key]
    except FileNotFoundError:
        return default
    return current


def load_tasks(start=None, end=None):
    if not api_client.is_enabled():
        st.info("TASKS_API_BASE_URL is not configured; showing an empty calendar.")
        return []
    return api_client.fetch_tasks(start, end)


load_local_env()
configure_logging()
st.set_page_config(page_title="Task Calendar", layout="wide")
inject_calendar_css()
api_client.configure(get_secret)

context = DashboardContext(
    settings=get_calendar_settings(),
    load_tasks=load_tasks,
)

render_router(context)
st.stop()
