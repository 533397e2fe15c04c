"""Page configuration for stamptour."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from stamptour.exceptions import StampTourConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StampTourConfig:
    """Page configuration.

    Parameters
    ----------
    base_url : str
        Origin of the event server serving ``/api/*.json`` and ``/login``.
    floor_count : int
        Number of selectable floors. Floors are numbered ``1..floor_count``.
    sync_interval : float
        Seconds between two reads of the collected-stamp record.
    request_timeout : float
        Total timeout in seconds for one HTTP request.
    wide_screen_width : int
        Screens strictly wider than this are treated as tablets/desktops
        without NFC.
    guide_prime_delay : float
        Seconds before the intro step primes the guide video.
    guide_demo_duration : float
        Seconds the scan demonstration plays before pausing.
    input_reveal_delay : float
        Seconds before the identity inputs receive their ``show`` class.
    user_expiry_days : float
        Lifetime of the stored ``user_id``/``user_name`` entries.
    guide_marker_expiry_days : float
        Lifetime of the ``ShowGuide`` marker.
    cancel_stale_guide_steps : bool
        Drop pending timed guide transitions when the guide modal is closed.
        ``False`` lets them fire after the modal is closed.
    """

    base_url: str = "http://localhost:8080"
    floor_count: int = 4
    sync_interval: float = 1.0
    request_timeout: float = 10.0
    wide_screen_width: int = 1024
    guide_prime_delay: float = 0.5
    guide_demo_duration: float = 4.0
    input_reveal_delay: float = 0.1
    user_expiry_days: float = 7
    guide_marker_expiry_days: float = 1
    cancel_stale_guide_steps: bool = True

    def __post_init__(self) -> None:
        if self.floor_count < 1:
            raise StampTourConfigError(f"floor_count must be >= 1, got {self.floor_count}")
        if self.sync_interval <= 0:
            raise StampTourConfigError(f"sync_interval must be > 0, got {self.sync_interval}")
        if self.request_timeout <= 0:
            raise StampTourConfigError(f"request_timeout must be > 0, got {self.request_timeout}")

    @property
    def floors(self) -> range:
        """All valid floor numbers."""
        return range(1, self.floor_count + 1)

    @classmethod
    def from_env(cls, **overrides: Any) -> StampTourConfig:
        """Create configuration from ``STAMPTOUR_*`` environment variables.

        Explicit keyword arguments take precedence over the environment.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("STAMPTOUR_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url.rstrip("/")

        _NUMERIC_ENV = {
            "STAMPTOUR_FLOOR_COUNT": ("floor_count", int),
            "STAMPTOUR_SYNC_INTERVAL": ("sync_interval", float),
            "STAMPTOUR_REQUEST_TIMEOUT": ("request_timeout", float),
            "STAMPTOUR_WIDE_SCREEN_WIDTH": ("wide_screen_width", int),
        }
        for env_key, (field_name, convert) in _NUMERIC_ENV.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = convert(val)
            except ValueError as exc:
                raise StampTourConfigError(f"{env_key} is not a valid number: {val!r}") from exc

        if "cancel_stale_guide_steps" not in overrides:
            config_kwargs["cancel_stale_guide_steps"] = _env_bool(
                env.get("STAMPTOUR_CANCEL_STALE_GUIDE_STEPS"),
                True,
            )

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
