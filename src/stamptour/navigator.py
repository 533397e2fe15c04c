"""Floor selection and per-floor pan/zoom mounting."""

from __future__ import annotations

import logging

from stamptour._constants import (
    ACTIVE_CLASS,
    FLOOR_HASH_PREFIX,
    SELECTED_CLASS,
    floor_map_id,
    floor_selector_id,
)
from stamptour.config import StampTourConfig
from stamptour.device import DeviceProfile
from stamptour.exceptions import FloorOutOfRangeError
from stamptour.panzoom import DESKTOP_OPTIONS, TOUCH_OPTIONS, PanZoom
from stamptour.view import Document, Element

_logger = logging.getLogger(__name__)


def floor_from_hash(url_hash: str, floor_count: int) -> int | None:
    """Parse a ``#Floor<N>`` deep link; ``None`` when absent or invalid."""
    if not url_hash.startswith(FLOOR_HASH_PREFIX):
        return None
    suffix = url_hash[len(FLOOR_HASH_PREFIX) :]
    if not suffix.isdigit():
        return None
    floor = int(suffix)
    if not 1 <= floor <= floor_count:
        return None
    return floor


class MapNavigator:
    """Owns the active floor.

    Usage::

        navigator = MapNavigator(config, document, profile)
        navigator.mount_all()
        navigator.switch_floor(3)
    """

    def __init__(self, config: StampTourConfig, document: Document, profile: DeviceProfile) -> None:
        self._config = config
        self._document = document
        self._profile = profile
        self._active_floor = 1
        self._surfaces: dict[int, PanZoom] = {}

    @property
    def active_floor(self) -> int:
        return self._active_floor

    def surface(self, floor: int) -> PanZoom | None:
        return self._surfaces.get(floor)

    def required_anchors(self) -> list[str]:
        anchors: list[str] = []
        for floor in self._config.floors:
            anchors.extend((floor_map_id(floor), floor_selector_id(floor)))
        return anchors

    def mount(self, surface: Element) -> PanZoom:
        options = TOUCH_OPTIONS if self._profile.touch_capable else DESKTOP_OPTIONS
        return PanZoom(surface, options)

    def mount_all(self) -> None:
        for floor in self._config.floors:
            map_view, selector = self._document.require(floor_map_id(floor), floor_selector_id(floor))
            self._surfaces[floor] = self.mount(map_view)
            selector.on("click", lambda _event, target=floor: self.switch_floor(target))
        self._paint()

    def _paint(self) -> None:
        for floor in self._config.floors:
            map_view, selector = self._document.require(floor_map_id(floor), floor_selector_id(floor))
            if floor == self._active_floor:
                map_view.add_class(ACTIVE_CLASS)
                selector.add_class(SELECTED_CLASS)
            else:
                map_view.remove_class(ACTIVE_CLASS)
                selector.remove_class(SELECTED_CLASS)

    def switch_floor(self, target: int) -> bool:
        """Make *target* the active floor; returns ``False`` when it already was.

        Raises
        ------
        FloorOutOfRangeError
            If *target* is not a floor of this venue.
        """
        if isinstance(target, bool) or not isinstance(target, int) or target not in self._config.floors:
            raise FloorOutOfRangeError(target, self._config.floor_count)
        if target == self._active_floor:
            return False

        current_map, current_selector, new_map, new_selector = self._document.require(
            floor_map_id(self._active_floor),
            floor_selector_id(self._active_floor),
            floor_map_id(target),
            floor_selector_id(target),
        )
        current_selector.remove_class(SELECTED_CLASS)
        new_selector.add_class(SELECTED_CLASS)
        current_map.remove_class(ACTIVE_CLASS)
        new_map.add_class(ACTIVE_CLASS)
        _logger.debug("Floor %d -> %d", self._active_floor, target)
        self._active_floor = target
        return True

    def apply_hash(self, url_hash: str) -> bool:
        """Follow a ``#Floor<N>`` deep link; anything else is ignored."""
        if not url_hash.startswith(FLOOR_HASH_PREFIX):
            return False
        floor = floor_from_hash(url_hash, self._config.floor_count)
        if floor is None:
            _logger.warning("Ignoring invalid floor deep link %r", url_hash)
            return False
        return self.switch_floor(floor)
