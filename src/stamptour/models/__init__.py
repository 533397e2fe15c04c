"""Data models for event server payloads."""

from stamptour.models._base import TourBaseModel
from stamptour.models.classroom import ClassList, Classroom
from stamptour.models.login import LoginRequest, LoginResponse
from stamptour.models.stamp import Stamp, StampList

__all__ = [
    "ClassList",
    "Classroom",
    "LoginRequest",
    "LoginResponse",
    "Stamp",
    "StampList",
    "TourBaseModel",
]
