import streamlit as st

from taskcal.gestures import SwipeTracker
from taskcal.navigation import NavigationState


PREFIX = "slice"


def get_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key not in st.session_state:
        st.session_state[key] = {}
    return st.session_state[key]


def get_value(slice_name, name, default=None):
    payload = get_slice(slice_name)
    return payload.get(name, default)


def set_value(slice_name, name, value):
    payload = get_slice(slice_name)
    payload[name] = value


def clear_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key in st.session_state:
        del st.session_state[key]


def get_navigation(slice_name, factory):
    """Navigation state owned by one presenter slice, created on first use."""
    state = get_value(slice_name, "navigation")
    if not isinstance(state, NavigationState):
        state = factory()
        set_value(slice_name, "navigation", state)
    return state


def set_navigation(slice_name, state):
    previous = get_value(slice_name, "navigation")
    set_value(slice_name, "navigation", state)
    return previous != state


def get_swipe_tracker(slice_name, threshold):
    tracker = get_value(slice_name, "swipe")
    if not isinstance(tracker, SwipeTracker) or tracker.threshold != threshold:
        tracker = SwipeTracker(threshold)
        set_value(slice_name, "swipe", tracker)
    return tracker
