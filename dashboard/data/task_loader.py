import logging

import streamlit as st

from dashboard.state import session_slices
from taskcal.task_index import ON_INVALID_SKIP, TaskIndex

logger = logging.getLogger(__name__)


def request_refresh(slice_name):
    session_slices.set_value(slice_name, "force_refresh", True)


def load_index(ctx, slice_name, start=None, end=None):
    """Task index for the ``start``..``end`` days, cached in ``slice_name``.

    The task service is called again only when the range changes or a refresh
    was requested for the slice. ``None`` leaves that side of the range open.
    """
    settings = ctx["settings"]
    wanted = (start, end)
    cached = session_slices.get_value(slice_name, "index")
    force_refresh = bool(session_slices.get_value(slice_name, "force_refresh", False))
    if cached is not None and not force_refresh and session_slices.get_value(slice_name, "index_range") == wanted:
        return cached
    try:
        tasks = ctx["load_tasks"](start, end)
    except RuntimeError as exc:
        st.warning(f"Could not load tasks: {exc}")
        tasks = []
    if ctx.get("hide_archived", True):
        tasks = ctx["exclude_archived"](tasks)
    index = TaskIndex.build(tasks, tz=settings.tzinfo, on_invalid=ON_INVALID_SKIP)
    if index.rejected:
        st.warning(f"{len(index.rejected)} task(s) have an unreadable date and are not shown.")
    logger.debug("Loaded %r for %s..%s into slice %s", index, start, end, slice_name)
    session_slices.set_value(slice_name, "index", index)
    session_slices.set_value(slice_name, "index_range", wanted)
    session_slices.set_value(slice_name, "force_refresh", False)
    return index
