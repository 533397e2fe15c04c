"""Device capability facts used to pick guide copy and assets.

The profile is derived once, at page start, from a :class:`CapabilityDetector`
and never changes afterwards.
"""

from __future__ import annotations

import dataclasses
from enum import StrEnum
from typing import Protocol

# Galaxy Z Flip models (SM-F700, F711, F721, F731) read NFC at the rear bottom.
_Z_FLIP_MODELS: tuple[str, ...] = ("sm-f700", "sm-f711", "sm-f721", "sm-f731")

WIDE_SCREEN_LABEL = "a tablet or a phone without NFC"
DEFAULT_DEVICE_LABEL = "your device"
DEFAULT_NFC_LOCATION = "rear center"


class VideoVariant(StrEnum):
    NO_NFC = "NoNFC"
    IPHONE = "iPhone"
    BOTTOM = "Bottom"
    CENTER = "Center"


class CapabilityDetector(Protocol):
    """Source of the raw facts a device profile is derived from."""

    def user_agent(self) -> str:
        ...

    def screen_width(self) -> int:
        ...

    def touch_capable(self) -> bool:
        ...


@dataclasses.dataclass(frozen=True)
class StaticCapabilities:
    """Fixed capability facts, e.g. reported once by the host page."""

    agent: str = ""
    width: int = 390
    touch: bool = True

    def user_agent(self) -> str:
        return self.agent

    def screen_width(self) -> int:
        return self.width

    def touch_capable(self) -> bool:
        return self.touch


@dataclasses.dataclass(frozen=True)
class DeviceProfile:
    """Read-only device facts consumed by the guide and the map."""

    is_wide_screen: bool = False
    device_label: str = DEFAULT_DEVICE_LABEL
    nfc_location_label: str = DEFAULT_NFC_LOCATION
    video_variant: VideoVariant = VideoVariant.CENTER
    touch_capable: bool = True
    suppress_double_tap: bool = False

    @property
    def video_sources(self) -> tuple[tuple[str, str], ...]:
        """``(src, type)`` pairs for the guide video, preferred first."""
        stem = f"/videos/Guide_NFC_{self.video_variant.value}"
        return ((f"{stem}.webm", "video/webm"), (f"{stem}.mov", "video/mp4"))


def detect_device_profile(capabilities: CapabilityDetector, *, wide_screen_width: int = 1024) -> DeviceProfile:
    """Derive the profile; the first matching rule wins."""
    agent = capabilities.user_agent().lower()
    touch = capabilities.touch_capable()

    if capabilities.screen_width() > wide_screen_width:
        return DeviceProfile(
            is_wide_screen=True,
            device_label=WIDE_SCREEN_LABEL,
            video_variant=VideoVariant.NO_NFC,
            touch_capable=touch,
        )
    if "iphone" in agent:
        return DeviceProfile(
            device_label="iPhone",
            nfc_location_label="top",
            video_variant=VideoVariant.IPHONE,
            touch_capable=touch,
            suppress_double_tap=True,
        )
    if any(model in agent for model in _Z_FLIP_MODELS):
        return DeviceProfile(
            device_label="Galaxy Z Flip",
            nfc_location_label="rear bottom",
            video_variant=VideoVariant.BOTTOM,
            touch_capable=touch,
        )
    return DeviceProfile(touch_capable=touch)
