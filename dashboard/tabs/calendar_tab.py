import calendar
import html
import logging

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from dashboard.data import task_loader
from dashboard.state import session_slices
from taskcal import grid, labels
from taskcal.agenda import day_summary
from taskcal.errors import InvalidTimestamp
from taskcal.navigation import NavigationState

logger = logging.getLogger(__name__)

SLICE = "calendar"

PRIORITY_CLASSES = {1: "low", 2: "medium", 3: "high", 4: "urgent"}

SWIPE_CAPTURE_JS = """
<div id="swipe-surface" style="height:36px;border-radius:8px;background:#f2eef7;
     color:#7a6f8a;font:12px sans-serif;display:flex;align-items:center;justify-content:center;">
  Swipe here to change period
</div>
<script>
const surface = document.getElementById("swipe-surface");
let start = null;
surface.addEventListener("touchstart", (e) => {
  start = [e.touches[0].clientX, e.touches[0].clientY];
}, {passive: true});
surface.addEventListener("touchend", (e) => {
  if (!start) return;
  const end = [e.changedTouches[0].clientX, e.changedTouches[0].clientY];
  const params = new URLSearchParams(window.parent.location.search);
  params.set("swipe", [start[0], start[1], end[0], end[1]].map(Math.round).join(","));
  start = null;
  window.parent.location.search = params.toString();
}, {passive: true});
</script>
"""


def _new_navigation(ctx):
    settings = ctx["settings"]
    return NavigationState.initial(
        today=ctx["today"](),
        view=settings.default_view,
        week_starts_on=settings.week_starts_on,
        select_today=True,
    )


def _move(state, transition, *args):
    try:
        return transition(*args)
    except InvalidTimestamp as exc:
        st.error(f"Cannot move the calendar there: {exc}")
        return state


def _handle_swipe_param(ctx, state):
    raw = st.query_params.get("swipe")
    if not raw:
        return state
    try:
        start_x, start_y, end_x, end_y = [float(part) for part in str(raw).split(",")]
    except ValueError:
        logger.info("Ignoring malformed swipe parameter %r", raw)
        return state
    finally:
        del st.query_params["swipe"]
    tracker = session_slices.get_swipe_tracker(SLICE, ctx["settings"].swipe_threshold)
    tracker.touch_start(start_x, start_y)
    intent = tracker.touch_end(end_x, end_y)
    return _move(state, state.apply, intent)


def _render_header(ctx, state):
    cols = st.columns([0.7, 0.8, 0.7, 2.6, 1.0])
    new_state = state
    with cols[0]:
        if st.button("◀", key="calendar.prev", use_container_width=True):
            new_state = _move(state, state.previous)
    with cols[1]:
        if st.button("Today", key="calendar.today", use_container_width=True):
            new_state = state.go_to_today(ctx["today"]())
    with cols[2]:
        if st.button("▶", key="calendar.next", use_container_width=True):
            new_state = _move(state, state.next)
    with cols[3]:
        label = labels.period_label(state.view, state.anchor_date, state.week_starts_on)
        st.markdown(f"<div class='calendar-section-title'>{html.escape(label)}</div>", unsafe_allow_html=True)
    with cols[4]:
        toggle_label = "Week view" if state.view.value == "month" else "Month view"
        if st.button(toggle_label, key="calendar.toggle", use_container_width=True):
            new_state = state.toggle_view()

    # Keyed on the anchor so the pickers follow prev/next.
    anchor_suffix = state.anchor_date.isoformat()
    with st.expander("Jump to month", expanded=False):
        jump_cols = st.columns([1.2, 1.0, 0.8])
        with jump_cols[0]:
            month = st.selectbox(
                "Month",
                list(range(1, 13)),
                index=state.anchor_date.month - 1,
                format_func=lambda value: calendar.month_name[value],
                key=f"calendar.jump.month.{anchor_suffix}",
            )
        with jump_cols[1]:
            year = st.number_input(
                "Year",
                min_value=1,
                max_value=9999,
                step=1,
                value=state.anchor_date.year,
                key=f"calendar.jump.year.{anchor_suffix}",
            )
        with jump_cols[2]:
            if st.button("Go", key="calendar.jump.go", use_container_width=True):
                new_state = _move(state, state.go_to_month, int(year), int(month))
    return new_state


def build_grid_html(cells, week_starts_on, preview_limit):
    header_cells = "".join(f"<th>{html.escape(name)}</th>" for name in labels.weekday_headers(week_starts_on))
    rows = []
    for week in grid.weeks(cells):
        tds = []
        for day in week:
            classes = ["calendar-cell"]
            if not day.in_current_period:
                classes.append("outside")
            if day.is_selected:
                classes.append("selected")
            if day.is_today:
                classes.append("today")
            shown, hidden = grid.cell_preview(day, preview_limit)
            indicators = "".join(
                f"<span class='cal-dot cal-{PRIORITY_CLASSES.get(int(task.priority), 'medium')}' "
                f"title='{html.escape(task.title)}'></span>"
                for task in shown
            )
            if hidden:
                indicators += f"<span class='cal-more'>+{hidden}</span>"
            tds.append(
                f"<td class='{' '.join(classes)}'>"
                f"<div class='calendar-day'>{day.date.day}</div>"
                f"<div class='calendar-badges'>{indicators}</div>"
                "</td>"
            )
        rows.append(f"<tr>{''.join(tds)}</tr>")
    return (
        "<div class='calendar-month'>"
        "<table class='calendar-table'>"
        f"<thead><tr>{header_cells}</tr></thead>"
        f"<tbody>{''.join(rows)}</tbody>"
        "</table>"
        "</div>"
    )


def build_week_rows(cells):
    rows = []
    for day in cells:
        rows.append(
            {
                "Day": labels.short_day_label(day.date),
                "Tasks": len(day.tasks),
                "Done": sum(1 for task in day.tasks if task.is_completed),
                "Preview": " | ".join(task.title or str(task.id) for task in day.tasks[:3]),
            }
        )
    return rows


def _on_day_picked(widget_key):
    picked = st.session_state.get(widget_key)
    state = session_slices.get_value(SLICE, "navigation")
    if picked is None or not isinstance(state, NavigationState):
        return
    session_slices.set_value(SLICE, "navigation", state.select_date(picked))


def _render_day_picker(state, cells):
    options = [day.date for day in cells]
    widget_key = f"calendar.pick.{state.anchor_date.isoformat()}.{state.view.value}"
    st.selectbox(
        "Selected day",
        options,
        index=options.index(state.selected_date) if state.selected_date in options else None,
        format_func=labels.short_day_label,
        placeholder="Pick a day",
        key=widget_key,
        on_change=_on_day_picked,
        args=(widget_key,),
    )


def _render_selected_day(index, state, cells):
    if state.selected_date is None:
        st.caption("Pick a day to see its tasks.")
        return
    heading = html.escape(labels.day_heading(state.selected_date))
    st.markdown(f"<div class='calendar-section-title'>{heading}</div>", unsafe_allow_html=True)
    if state.selected_date not in {day.date for day in cells}:
        st.caption("This day is outside the visible range. Pick a day in the grid or go back to it.")
        return
    day_tasks = index.tasks_on(state.selected_date)
    summary = day_summary(day_tasks)
    st.caption(f"{summary.total} task(s) • {summary.completed} done • {summary.pending} pending")
    if not day_tasks:
        st.caption("No tasks for this day.")
        return
    for task in day_tasks:
        mark = "✓" if task.is_completed else "•"
        st.markdown(f"{mark} **{html.escape(task.title or str(task.id))}** · {task.priority.label}")


def render_calendar_tab(ctx):
    settings = ctx["settings"]
    state = session_slices.get_navigation(SLICE, lambda: _new_navigation(ctx))
    state = _handle_swipe_param(ctx, state)

    st.markdown("<div class='section-title'>Calendar</div>", unsafe_allow_html=True)
    state = _render_header(ctx, state)
    if session_slices.set_navigation(SLICE, state):
        st.rerun()
    if ctx.get("touch_navigation", True):
        components.html(SWIPE_CAPTURE_JS, height=44)

    try:
        first, last = state.visible_range()
        index = task_loader.load_index(ctx, SLICE, first, last)
        cells = state.grid(index, today=ctx["today"]())
    except InvalidTimestamp as exc:
        st.error(f"Calendar could not be built: {exc}")
        return

    layout = st.columns([1.6, 1.0], gap="large")
    with layout[0]:
        st.markdown(
            build_grid_html(cells, state.week_starts_on, settings.cell_preview_limit),
            unsafe_allow_html=True,
        )
        if state.view.value == "week":
            st.dataframe(pd.DataFrame(build_week_rows(cells)), use_container_width=True, hide_index=True)
        _render_day_picker(state, cells)
    with layout[1]:
        _render_selected_day(index, state, cells)
        if st.button("Refresh tasks", key="calendar.refresh"):
            task_loader.request_refresh(SLICE)
            st.rerun()

    st.divider()
    st.caption(f"Range: {first.to_date().strftime('%d/%m/%Y')} - {last.to_date().strftime('%d/%m/%Y')}")
