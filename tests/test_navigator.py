from __future__ import annotations

import pytest
from pydantic import ValidationError

from stamptour.config import StampTourConfig
from stamptour.device import DeviceProfile
from stamptour.exceptions import FloorOutOfRangeError
from stamptour.navigator import MapNavigator, floor_from_hash
from stamptour.panzoom import DESKTOP_OPTIONS, TOUCH_OPTIONS, PanZoomOptions
from stamptour.view import Document, Event


def _navigator(document: Document, *, touch: bool = True) -> MapNavigator:
    navigator = MapNavigator(StampTourConfig(), document, DeviceProfile(touch_capable=touch))
    navigator.mount_all()
    return navigator


def _active(document: Document) -> tuple[list[int], list[int]]:
    maps = [floor for floor in range(1, 5) if document.get(f"Floor{floor}MapView").has_class("active")]
    selectors = [floor for floor in range(1, 5) if document.get(f"Floor{floor}").has_class("selected")]
    return maps, selectors


def test_first_floor_is_active_after_mount(document: Document) -> None:
    navigator = _navigator(document)

    assert navigator.active_floor == 1
    assert _active(document) == ([1], [1])


@pytest.mark.parametrize("sequence", [[2, 3, 4, 1], [4, 4, 2], [3, 1, 3, 2, 2]])
def test_exactly_one_floor_is_active(document: Document, sequence: list[int]) -> None:
    navigator = _navigator(document)

    for floor in sequence:
        navigator.switch_floor(floor)
        assert _active(document) == ([floor], [floor])
        assert navigator.active_floor == floor


def test_switching_to_active_floor_is_a_no_op(document: Document) -> None:
    navigator = _navigator(document)
    navigator.switch_floor(2)
    before = [list(document.get(f"Floor{floor}MapView").classes) for floor in range(1, 5)]

    assert navigator.switch_floor(2) is False
    assert [list(document.get(f"Floor{floor}MapView").classes) for floor in range(1, 5)] == before


@pytest.mark.parametrize("floor", [0, 5, -1, "2", 2.0, True])
def test_out_of_range_floor_is_rejected(document: Document, floor: object) -> None:
    navigator = _navigator(document)

    with pytest.raises(FloorOutOfRangeError):
        navigator.switch_floor(floor)  # type: ignore[arg-type]

    assert navigator.active_floor == 1
    assert _active(document) == ([1], [1])


def test_selector_click_switches_floor(document: Document) -> None:
    navigator = _navigator(document)

    document.get("Floor3").click()

    assert navigator.active_floor == 3
    assert _active(document) == ([3], [3])


@pytest.mark.parametrize(
    ("url_hash", "expected"),
    [("#Floor3", 3), ("#Floor1", 1), ("#Floor9", None), ("#Floorx", None), ("#Floor", None), ("", None), ("#Map2", None)],
)
def test_floor_from_hash(url_hash: str, expected: int | None) -> None:
    assert floor_from_hash(url_hash, 4) == expected


def test_apply_hash_follows_deep_link(document: Document) -> None:
    navigator = _navigator(document)

    assert navigator.apply_hash("#Floor3") is True
    assert _active(document) == ([3], [3])


@pytest.mark.parametrize("url_hash", ["#Floor9", "#Floor0", "#Floorabc", "#top", ""])
def test_apply_hash_ignores_invalid_links(document: Document, url_hash: str) -> None:
    navigator = _navigator(document)

    assert navigator.apply_hash(url_hash) is False
    assert navigator.active_floor == 1


def test_touch_devices_mount_touch_options(document: Document) -> None:
    navigator = _navigator(document, touch=True)

    assert navigator.surface(1).options is TOUCH_OPTIONS


def test_touch_on_classroom_marker_keeps_default(document: Document) -> None:
    _navigator(document, touch=True)
    surface = document.get("Floor1MapView")

    on_marker = surface.dispatch(Event("touchstart", document.get("101")))
    on_hallway = surface.dispatch(Event("touchstart", document.get("hall1")))
    on_no_booth = surface.dispatch(Event("touchstart", document.get("102")))
    on_background = surface.dispatch(Event("touchstart", surface))

    assert not on_marker.default_prevented
    assert on_hallway.default_prevented
    assert on_no_booth.default_prevented
    assert on_background.default_prevented


def test_desktop_devices_mount_desktop_options(document: Document) -> None:
    navigator = _navigator(document, touch=False)
    surface = document.get("Floor2MapView")

    event = surface.dispatch(Event("touchstart", surface))

    assert navigator.surface(2).options is DESKTOP_OPTIONS
    assert not event.default_prevented


def test_touch_zoom_stays_within_limits(document: Document) -> None:
    pan_zoom = _navigator(document, touch=True).surface(1)

    assert pan_zoom.zoom_by(10) == 2.0
    assert pan_zoom.zoom_by(0.01) == 0.3
    assert pan_zoom.zoom_to(1.0) == 1.0
    assert pan_zoom.double_tap() == 2.0


def test_desktop_double_tap_zooms_up_to_max(document: Document) -> None:
    pan_zoom = _navigator(document, touch=False).surface(1)

    assert [pan_zoom.double_tap() for _ in range(3)] == [2.0, 4.0, 5.0]


def test_dblclick_on_surface_zooms(document: Document) -> None:
    navigator = _navigator(document, touch=False)

    document.get("Floor1MapView").dispatch(Event("dblclick", document.get("Floor1MapView")))

    assert navigator.surface(1).scale == 2.0


def test_touch_pan_keeps_content_inside_viewport(document: Document) -> None:
    pan_zoom = _navigator(document, touch=True).surface(1)

    assert pan_zoom.pan_by(1000, 1000) == (400.0, 300.0)
    assert pan_zoom.pan_by(-5000, -5000) == (-400.0, -300.0)


def test_desktop_pan_allows_overshoot(document: Document) -> None:
    pan_zoom = _navigator(document, touch=False).surface(1)

    assert pan_zoom.pan_by(1000, 0) == (600.0, 0.0)
    assert pan_zoom.pan_by(-5000, 0) == (-600.0, 0.0)


def test_pan_zoom_options_reject_inverted_range() -> None:
    with pytest.raises(ValidationError):
        PanZoomOptions(min_zoom=3.0, max_zoom=2.0)
