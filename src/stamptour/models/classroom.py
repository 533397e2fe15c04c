"""Classroom models."""

from __future__ import annotations

from pydantic import Field

from stamptour.models._base import TourBaseModel


class Classroom(TourBaseModel):
    """A classroom hosting a booth; ``class_id`` is its map marker id."""

    class_id: str


class ClassList(TourBaseModel):
    """Payload of ``/api/classList.json``."""

    class_list: list[Classroom] = Field(default_factory=list)
