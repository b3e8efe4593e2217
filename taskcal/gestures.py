from __future__ import annotations

import logging
from typing import Optional, Tuple

from taskcal.navigation import INTENT_NEXT, INTENT_NONE, INTENT_PREVIOUS, INTENT_TODAY

logger = logging.getLogger(__name__)

DEFAULT_SWIPE_THRESHOLD = 50

KEY_INTENTS = {
    "ArrowLeft": INTENT_PREVIOUS,
    "ArrowRight": INTENT_NEXT,
    "Home": INTENT_TODAY,
}


def interpret(start_x, start_y, end_x, end_y, threshold=DEFAULT_SWIPE_THRESHOLD) -> str:
    """Classify a completed touch gesture as a navigation intent.

    A swipe counts only when the horizontal travel reaches ``threshold`` and
    is larger than the vertical travel, so vertical scrolls and diagonal drags
    are ignored. Dragging right means "previous", dragging left "next".
    """
    if threshold < 0:
        raise ValueError("threshold must be >= 0")
    delta_x = end_x - start_x
    delta_y = end_y - start_y
    if abs(delta_x) < threshold or abs(delta_x) <= abs(delta_y):
        return INTENT_NONE
    return INTENT_PREVIOUS if delta_x > 0 else INTENT_NEXT


def interpret_key(key: str) -> str:
    return KEY_INTENTS.get(key, INTENT_NONE)


class SwipeTracker:
    """Collects touch start/end coordinates for one input surface."""

    def __init__(self, threshold=DEFAULT_SWIPE_THRESHOLD):
        if threshold < 0:
            raise ValueError("threshold must be >= 0")
        self.threshold = threshold
        self._start: Optional[Tuple[float, float]] = None

    @property
    def active(self) -> bool:
        return self._start is not None

    def touch_start(self, x, y) -> None:
        self._start = (x, y)

    def touch_end(self, x, y) -> str:
        if self._start is None:
            return INTENT_NONE
        start_x, start_y = self._start
        self._start = None
        intent = interpret(start_x, start_y, x, y, self.threshold)
        logger.debug("Swipe (%s, %s) -> (%s, %s): %s", start_x, start_y, x, y, intent)
        return intent

    def cancel(self) -> None:
        self._start = None
