"""Custom exception hierarchy for stamptour."""

from __future__ import annotations


class StampTourError(Exception):
    """Base exception for all stamptour errors."""


class StampTourConfigError(StampTourError):
    """Invalid or missing configuration."""


class StampTourTransportError(StampTourError):
    """HTTP-level failure (network, non-200, invalid JSON or payload)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class StampTourLoginError(StampTourTransportError):
    """The login request was rejected or could not be completed."""


class MissingAnchorError(StampTourError):
    """One or more element anchors the page needs are not in the document."""

    def __init__(self, anchors: list[str]) -> None:
        self.anchors = list(anchors)
        super().__init__(f"Missing required page anchors: {', '.join(self.anchors)}")


class MalformedRecordError(StampTourError):
    """The persisted collected-stamp record could not be decoded."""


class FloorOutOfRangeError(StampTourError, ValueError):
    """A floor number outside ``1..floor_count`` was requested."""

    def __init__(self, floor: object, floor_count: int) -> None:
        self.floor = floor
        self.floor_count = floor_count
        super().__init__(f"floor must be between 1 and {floor_count}, got {floor!r}")
