"""Pan/zoom behaviour attached to a floor map surface."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stamptour._constants import HALLWAY_CLASS, NOT_CLASSROOM_CLASS
from stamptour.view import Element, Event

_logger = logging.getLogger(__name__)

# Map marker tags whose taps belong to the marker rather than the pan gesture.
_MARKER_TAGS: frozenset[str] = frozenset({"g", "rect", "text"})
_NON_INTERACTIVE_CLASSES: frozenset[str | None] = frozenset({HALLWAY_CLASS, NOT_CLASSROOM_CLASS})


class PanZoomOptions(BaseModel):
    """Options of one pan/zoom surface."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    bounds: bool = True
    bounds_padding: float = 0.0
    min_zoom: float = Field(default=0.5, gt=0)
    max_zoom: float = Field(default=5.0, gt=0)
    double_tap_zoom_speed: float = Field(default=1.0, ge=0)
    contain: str | None = None
    on_touch: Callable[[Event], bool] | None = None

    @model_validator(mode="after")
    def _zoom_range(self) -> PanZoomOptions:
        if self.min_zoom > self.max_zoom:
            raise ValueError("min_zoom must not exceed max_zoom")
        return self


def preserves_default_touch(target: Element) -> bool:
    """Whether a touch on *target* keeps its default handling.

    Taps on room markers (``g``/``rect``/``text`` not tagged ``hallway`` or
    ``notClassroom``) must reach the marker instead of starting a pan.
    """
    return target.tag in _MARKER_TAGS and target.first_class not in _NON_INTERACTIVE_CLASSES


def touch_intercept_policy(event: Event) -> bool:
    """``on_touch`` hook: returns ``True`` when the pan gesture takes the touch."""
    if preserves_default_touch(event.target):
        return False
    event.prevent_default()
    return True


TOUCH_OPTIONS = PanZoomOptions(
    bounds=True,
    bounds_padding=0.0,
    min_zoom=0.3,
    max_zoom=2.0,
    double_tap_zoom_speed=1.0,
    on_touch=touch_intercept_policy,
)

DESKTOP_OPTIONS = PanZoomOptions(
    bounds=True,
    bounds_padding=-0.5,
    min_zoom=0.5,
    max_zoom=5.0,
    double_tap_zoom_speed=1.0,
    contain="outside",
)


class PanZoom:
    """Scale and translation of one surface.

    With ``bounds`` set, at least ``bounds_padding`` of the scaled content
    stays inside a viewport the size of the unscaled surface; a negative
    padding allows the content to overshoot.
    """

    def __init__(self, surface: Element, options: PanZoomOptions) -> None:
        self.surface = surface
        self.options = options
        self.scale = 1.0
        self.x = 0.0
        self.y = 0.0
        surface.on("touchstart", self.handle_touch)
        surface.on("dblclick", lambda _event: self.double_tap())

    def _clamp_axis(self, value: float, size: float) -> float:
        if not self.options.bounds or size <= 0:
            return value
        content = size * self.scale
        visible = content * self.options.bounds_padding
        low = visible - content
        high = size - visible
        if low > high:
            low, high = high, low
        return min(max(value, low), high)

    def _clamp(self) -> None:
        self.x = self._clamp_axis(self.x, self.surface.width)
        self.y = self._clamp_axis(self.y, self.surface.height)

    def zoom_to(self, scale: float) -> float:
        self.scale = min(max(scale, self.options.min_zoom), self.options.max_zoom)
        self._clamp()
        return self.scale

    def zoom_by(self, factor: float) -> float:
        return self.zoom_to(self.scale * factor)

    def double_tap(self) -> float:
        if self.options.double_tap_zoom_speed <= 0:
            return self.scale
        return self.zoom_by(1 + self.options.double_tap_zoom_speed)

    def pan_by(self, dx: float, dy: float) -> tuple[float, float]:
        self.x += dx
        self.y += dy
        self._clamp()
        return self.x, self.y

    def handle_touch(self, event: Event) -> bool:
        """Run the ``on_touch`` policy; without one every touch pans."""
        if self.options.on_touch is None:
            return True
        intercepted = self.options.on_touch(event)
        _logger.debug("Touch on %r intercepted=%s", event.target, intercepted)
        return intercepted
