import pytest

from taskcal.gestures import SwipeTracker, interpret, interpret_key
from taskcal.navigation import INTENT_NEXT, INTENT_NONE, INTENT_PREVIOUS, INTENT_TODAY


def test_leftward_swipe_is_next():
    assert interpret(100, 100, 40, 105, threshold=50) == INTENT_NEXT


def test_rightward_swipe_is_previous():
    assert interpret(40, 100, 100, 95, threshold=50) == INTENT_PREVIOUS


def test_threshold_boundary():
    assert interpret(100, 100, 51, 100, threshold=50) == INTENT_NONE
    assert interpret(100, 100, 50, 100, threshold=50) == INTENT_NEXT
    assert interpret(0, 0, 50, 0, threshold=50) == INTENT_PREVIOUS


def test_vertical_scroll_is_ignored():
    assert interpret(100, 100, 100, 300) == INTENT_NONE
    assert interpret(100, 100, 160, 300) == INTENT_NONE


def test_exact_diagonal_is_ignored():
    assert interpret(0, 0, 80, 80) == INTENT_NONE


def test_custom_threshold():
    assert interpret(0, 0, -60, 0, threshold=80) == INTENT_NONE
    assert interpret(0, 0, -90, 0, threshold=80) == INTENT_NEXT


def test_negative_threshold_is_rejected():
    with pytest.raises(ValueError):
        interpret(0, 0, 10, 0, threshold=-1)
    with pytest.raises(ValueError):
        SwipeTracker(threshold=-5)


@pytest.mark.parametrize(
    "key,intent",
    [("ArrowLeft", INTENT_PREVIOUS), ("ArrowRight", INTENT_NEXT), ("Home", INTENT_TODAY), ("Enter", INTENT_NONE)],
)
def test_key_intents(key, intent):
    assert interpret_key(key) == intent


def test_tracker_pairs_start_and_end():
    tracker = SwipeTracker(threshold=50)

    tracker.touch_start(300, 200)
    assert tracker.active
    assert tracker.touch_end(200, 210) == INTENT_NEXT
    assert not tracker.active


def test_tracker_without_start_reports_nothing():
    tracker = SwipeTracker()

    assert tracker.touch_end(0, 0) == INTENT_NONE


def test_tracker_cancel_drops_gesture():
    tracker = SwipeTracker()
    tracker.touch_start(0, 0)

    tracker.cancel()

    assert tracker.touch_end(200, 0) == INTENT_NONE
