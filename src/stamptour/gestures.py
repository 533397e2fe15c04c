"""Swipe classification for opening and closing the stamp panel."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from stamptour._constants import STAMP_CLASS, STAMP_CONTENT_TAGS
from stamptour.panel import StampPanel
from stamptour.view import Element, Event

_logger = logging.getLogger(__name__)


class SwipeDirection(StrEnum):
    UP = "up"
    DOWN = "down"
    NONE = "none"


@dataclass(frozen=True)
class SwipeIntent:
    direction: SwipeDirection = SwipeDirection.NONE


def classify_swipe(start_y: float, end_y: float) -> SwipeIntent:
    """Screen y grows downwards: ending above the start is an upward swipe."""
    if end_y < start_y:
        return SwipeIntent(SwipeDirection.UP)
    if end_y > start_y:
        return SwipeIntent(SwipeDirection.DOWN)
    return SwipeIntent(SwipeDirection.NONE)


class GestureRouter:
    """Two-phase touch protocol on the stamp panel.

    ``touchstart`` records a baseline, ``touchend`` compares against it. The
    baseline is cleared on every start so a rejected start never pairs with
    a later end.
    """

    def __init__(self, panel: StampPanel) -> None:
        self._panel = panel
        self._baseline: float | None = None

    @property
    def baseline(self) -> float | None:
        return self._baseline

    def bind(self) -> None:
        self._panel.container.on("touchstart", self.on_touch_start)
        self._panel.container.on("touchend", self.on_touch_end)

    def _origin_allowed(self, target: Element) -> bool:
        stamp_list = self._panel.stamp_list
        is_content_tag = target.tag in STAMP_CONTENT_TAGS
        outside_list = target is not stamp_list and target.first_class != STAMP_CLASS and not is_content_tag
        list_at_top = stamp_list.scroll_top <= 0 and not is_content_tag
        return outside_list or list_at_top

    def on_touch_start(self, event: Event) -> None:
        self._baseline = None
        if event.screen_y is not None and self._origin_allowed(event.target):
            self._baseline = event.screen_y

    def on_touch_end(self, event: Event) -> SwipeIntent:
        if event.screen_y is None or not self._origin_allowed(event.target):
            return SwipeIntent()
        if self._baseline is None:
            return SwipeIntent()

        intent = classify_swipe(self._baseline, event.screen_y)
        if intent.direction is SwipeDirection.UP:
            self._panel.open()
        elif intent.direction is SwipeDirection.DOWN:
            self._panel.close()
        _logger.debug("Swipe %s (open=%s)", intent.direction, self._panel.is_open)
        return intent
