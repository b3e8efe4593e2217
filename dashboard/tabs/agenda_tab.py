import html

import streamlit as st

from dashboard.data import task_loader
from taskcal.agenda import build_agenda
from taskcal.buckets import add_days, to_local_datetime

SLICE = "agenda"

SECTIONS = [
    ("overdue", "Overdue", "Nothing overdue."),
    ("today", "Today", "Nothing due today."),
    ("upcoming", "Upcoming", "Nothing scheduled for the coming days."),
]


def _task_line(task, tz):
    moment = to_local_datetime(task.date, tz)
    title = html.escape(task.title or str(task.id))
    return f"{moment.strftime('%a %d/%m %H:%M')} • **{title}** · {task.priority.label}"


def render_agenda_tab(ctx):
    settings = ctx["settings"]
    today = ctx["today"]()
    # Overdue has no lower bound, so only the end of the horizon narrows the fetch.
    index = task_loader.load_index(ctx, SLICE, None, add_days(today, settings.agenda_horizon_days))
    agenda = build_agenda(
        index,
        today=today,
        horizon_days=settings.agenda_horizon_days,
        tz=settings.tzinfo,
    )
    st.markdown("<div class='section-title'>Agenda</div>", unsafe_allow_html=True)
    st.caption(f"{len(agenda)} pending task(s) in the next {settings.agenda_horizon_days} days")
    for attr, title, empty in SECTIONS:
        items = getattr(agenda, attr)
        st.markdown(f"<div class='calendar-section-title'>{title} ({len(items)})</div>", unsafe_allow_html=True)
        if not items:
            st.caption(empty)
            continue
        for task in items:
            st.markdown(_task_line(task, settings.tzinfo))
    if st.button("Refresh tasks", key="agenda.refresh"):
        task_loader.request_refresh(SLICE)
        st.rerun()
