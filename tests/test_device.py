from __future__ import annotations

import pytest

from stamptour.device import DeviceProfile, StaticCapabilities, VideoVariant, detect_device_profile

IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15"
PIXEL_UA = "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36"


@pytest.mark.parametrize(
    ("agent", "label", "location", "variant"),
    [
        (IPHONE_UA, "iPhone", "top", VideoVariant.IPHONE),
        ("Mozilla/5.0 (Linux; Android 13; SM-F711N)", "Galaxy Z Flip", "rear bottom", VideoVariant.BOTTOM),
        ("Mozilla/5.0 (Linux; Android 14; sm-f731b)", "Galaxy Z Flip", "rear bottom", VideoVariant.BOTTOM),
        (PIXEL_UA, "your device", "rear center", VideoVariant.CENTER),
        ("", "your device", "rear center", VideoVariant.CENTER),
    ],
)
def test_phone_profiles(agent: str, label: str, location: str, variant: VideoVariant) -> None:
    profile = detect_device_profile(StaticCapabilities(agent=agent, width=390))

    assert not profile.is_wide_screen
    assert profile.device_label == label
    assert profile.nfc_location_label == location
    assert profile.video_variant is variant


def test_wide_screen_wins_over_user_agent() -> None:
    profile = detect_device_profile(StaticCapabilities(agent=IPHONE_UA, width=1366, touch=False))

    assert profile.is_wide_screen
    assert profile.video_variant is VideoVariant.NO_NFC
    assert not profile.touch_capable
    assert not profile.suppress_double_tap


def test_wide_screen_threshold_is_exclusive() -> None:
    assert not detect_device_profile(StaticCapabilities(width=1024)).is_wide_screen
    assert detect_device_profile(StaticCapabilities(width=1025)).is_wide_screen
    assert detect_device_profile(StaticCapabilities(width=900), wide_screen_width=800).is_wide_screen


def test_only_iphone_suppresses_double_tap() -> None:
    assert detect_device_profile(StaticCapabilities(agent=IPHONE_UA)).suppress_double_tap
    assert not detect_device_profile(StaticCapabilities(agent=PIXEL_UA)).suppress_double_tap


def test_video_sources_prefer_webm() -> None:
    profile = DeviceProfile(video_variant=VideoVariant.BOTTOM)

    assert profile.video_sources == (
        ("/videos/Guide_NFC_Bottom.webm", "video/webm"),
        ("/videos/Guide_NFC_Bottom.mov", "video/mp4"),
    )
