"""stamptour - Async headless view-model for the stamp tour event page."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stamptour")
except PackageNotFoundError:
    __version__ = "0+local"
from stamptour._transport import HttpGateway, NetworkGateway
from stamptour.classrooms import ClassroomDirectory
from stamptour.config import StampTourConfig
from stamptour.device import (
    CapabilityDetector,
    DeviceProfile,
    StaticCapabilities,
    VideoVariant,
    detect_device_profile,
)
from stamptour.exceptions import (
    FloorOutOfRangeError,
    MalformedRecordError,
    MissingAnchorError,
    StampTourConfigError,
    StampTourError,
    StampTourLoginError,
    StampTourTransportError,
)
from stamptour.gestures import GestureRouter, SwipeDirection, SwipeIntent, classify_swipe
from stamptour.guide import GuideStep, TourController
from stamptour.location import PageLocation
from stamptour.models import ClassList, Classroom, LoginRequest, LoginResponse, Stamp, StampList
from stamptour.navigator import MapNavigator
from stamptour.page import StampTourPage
from stamptour.panel import StampPanel
from stamptour.panzoom import PanZoom, PanZoomOptions
from stamptour.records import CollectedStampRecord, decode_stamp_record, encode_stamp_record
from stamptour.scheduler import AsyncioScheduler, Scheduler
from stamptour.store import CookieStore, MemoryStore, PersistentStore
from stamptour.sync import StampSyncEngine
from stamptour.view import Document, Element, Event, LoggingNotifier, MediaElement, Notifier

__all__ = [
    "__version__",
    "AsyncioScheduler",
    "CapabilityDetector",
    "ClassList",
    "Classroom",
    "ClassroomDirectory",
    "CollectedStampRecord",
    "CookieStore",
    "DeviceProfile",
    "Document",
    "Element",
    "Event",
    "FloorOutOfRangeError",
    "GestureRouter",
    "GuideStep",
    "HttpGateway",
    "LoggingNotifier",
    "LoginRequest",
    "LoginResponse",
    "MalformedRecordError",
    "MapNavigator",
    "MediaElement",
    "MemoryStore",
    "MissingAnchorError",
    "NetworkGateway",
    "Notifier",
    "PageLocation",
    "PanZoom",
    "PanZoomOptions",
    "PersistentStore",
    "Scheduler",
    "Stamp",
    "StampList",
    "StampPanel",
    "StampSyncEngine",
    "StampTourConfig",
    "StampTourConfigError",
    "StampTourError",
    "StampTourLoginError",
    "StampTourPage",
    "StampTourTransportError",
    "StaticCapabilities",
    "SwipeDirection",
    "SwipeIntent",
    "TourController",
    "VideoVariant",
    "classify_swipe",
    "decode_stamp_record",
    "detect_device_profile",
    "encode_stamp_record",
]
