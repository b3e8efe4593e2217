import streamlit as st

from dashboard.tabs.agenda_tab import render_agenda_tab
from dashboard.tabs.calendar_tab import render_calendar_tab


TAB_OPTIONS = [
    "Calendar",
    "Agenda",
]


def render_router(ctx):
    active = st.session_state.get("ui.active_tab", TAB_OPTIONS[0])
    active = st.segmented_control(
        "Workspace",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=active,
    )

    if active == "Agenda":
        return _render_agenda(ctx)

    return _render_calendar(ctx)


@st.fragment
def _render_calendar(ctx):
    render_calendar_tab(ctx)


@st.fragment
def _render_agenda(ctx):
    render_agenda_tab(ctx)
