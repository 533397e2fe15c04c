"""Stamp catalog models."""

from __future__ import annotations

from pydantic import Field, field_validator

from stamptour.models._base import TourBaseModel


class Stamp(TourBaseModel):
    """One collectible waypoint of the tour."""

    stamp_id: str
    stamp_name: str = ""
    stamp_location: str = ""
    stamp_desc: str | None = None

    @field_validator("stamp_id")
    @classmethod
    def _stamp_id_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("stampId must be non-empty")
        return value


class StampList(TourBaseModel):
    """Payload of ``/api/stampList.json``."""

    stamp_list: list[Stamp] = Field(default_factory=list)
