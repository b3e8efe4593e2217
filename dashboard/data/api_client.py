import logging
import os
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from taskcal.models import Task

logger = logging.getLogger(__name__)

_SECRET_GETTER = None


def _build_session():
    session = requests.Session()
    retry = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=(502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=4, pool_maxsize=4)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


_SESSION = _build_session()


def configure(secret_getter):
    global _SECRET_GETTER
    _SECRET_GETTER = secret_getter


def _get_secret(path, default=None):
    if _SECRET_GETTER is None:
        return default
    return _SECRET_GETTER(path, default)


def tasks_api_base_url():
    return (
        _get_secret(("tasks", "API_BASE_URL"))
        or _get_secret(("TASKS_API_BASE_URL",))
        or os.getenv("TASKS_API_BASE_URL")
        or ""
    )


def tasks_api_token():
    return (
        _get_secret(("tasks", "API_TOKEN"))
        or _get_secret(("TASKS_API_TOKEN",))
        or os.getenv("TASKS_API_TOKEN")
        or ""
    )


def is_enabled():
    return bool(tasks_api_base_url())


def request(method: str, path: str, params: dict | None = None, json: dict | None = None, timeout: int = 10) -> Any:
    base = tasks_api_base_url().rstrip("/")
    if not base:
        raise RuntimeError("TASKS_API_BASE_URL not configured")
    headers = {"Accept": "application/json"}
    token = tasks_api_token()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    url = f"{base}{path}"
    response = _SESSION.request(method, url, params=params, json=json, headers=headers, timeout=timeout)
    if not response.ok:
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        raise RuntimeError(f"API error {response.status_code} {response.reason}: {detail}")
    if response.status_code == 204:
        return None
    return response.json()


def parse_tasks(payload) -> list[Task]:
    if isinstance(payload, dict):
        payload = payload.get("items") or payload.get("tasks") or []
    return [Task.from_dict(item) for item in payload or [] if isinstance(item, dict)]


def fetch_tasks(start=None, end=None) -> list[Task]:
    """Fetch the current user's tasks from the task service.

    ``start``/``end`` (inclusive calendar days) narrow the request to a
    visible range; without them the service returns everything.
    """
    params = {}
    if start is not None:
        params["start"] = start.isoformat()
    if end is not None:
        params["end"] = end.isoformat()
    tasks = parse_tasks(request("GET", "/api/tasks", params=params or None))
    logger.debug("Fetched %d tasks (start=%s, end=%s)", len(tasks), start, end)
    return tasks
