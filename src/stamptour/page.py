"""Page bootstrap: wires every component to the host document."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from stamptour._api.classrooms import fetch_class_list
from stamptour._api.stamps import fetch_stamp_list
from stamptour._constants import (
    CLASS_INFO_CLOSE,
    CLASS_INFO_MODAL,
    CLASS_INFO_TITLE,
    GUIDE_HINT,
    GUIDE_MODAL,
    GUIDE_SHOWN_KEY,
    GUIDE_TEXT,
    GUIDE_TITLE,
    GUIDE_VIDEO,
    NEXT_GUIDE_BUTTON,
    PRIVACY_CONTAINER,
    REPLAY_CONTAINER,
    REPLAY_GUIDE_BUTTON,
    SHOW_GUIDE_BUTTON,
    STAMP_LIST,
    STAMP_PANEL,
    STUDENT_ID_INPUT,
    STUDENT_NAME_INPUT,
)
from stamptour._transport import HttpGateway, NetworkGateway
from stamptour.classrooms import ClassroomDirectory
from stamptour.config import StampTourConfig
from stamptour.device import CapabilityDetector, DeviceProfile, StaticCapabilities, detect_device_profile
from stamptour.exceptions import StampTourError, StampTourTransportError
from stamptour.gestures import GestureRouter
from stamptour.guide import GuideAnchors, TourController
from stamptour.location import PageLocation
from stamptour.models.classroom import Classroom
from stamptour.models.stamp import Stamp
from stamptour.navigator import MapNavigator
from stamptour.panel import StampPanel
from stamptour.scheduler import AsyncioScheduler, Scheduler
from stamptour.store import MemoryStore, PersistentStore
from stamptour.sync import StampSyncEngine
from stamptour.view import Document, LoggingNotifier, Notifier

_logger = logging.getLogger(__name__)

STAMP_LIST_FAILED_NOTICE = "Could not load the stamp list."
CLASS_LIST_FAILED_NOTICE = "Could not load the classroom list."

PAGE_ANCHORS: tuple[str, ...] = (
    STAMP_PANEL,
    STAMP_LIST,
    SHOW_GUIDE_BUTTON,
    GUIDE_MODAL,
    GUIDE_VIDEO,
    GUIDE_TITLE,
    GUIDE_HINT,
    GUIDE_TEXT,
    NEXT_GUIDE_BUTTON,
    REPLAY_GUIDE_BUTTON,
    REPLAY_CONTAINER,
    PRIVACY_CONTAINER,
    STUDENT_ID_INPUT,
    STUDENT_NAME_INPUT,
    CLASS_INFO_MODAL,
    CLASS_INFO_TITLE,
    CLASS_INFO_CLOSE,
)


@dataclass(frozen=True)
class PageComponents:
    panel: StampPanel
    guide: TourController
    classrooms: ClassroomDirectory
    navigator: MapNavigator
    gestures: GestureRouter
    sync: StampSyncEngine


class StampTourPage:
    """The stamp tour page.

    Usage::

        async with StampTourPage(config, document, capabilities=caps) as page:
            await page.init()
    """

    def __init__(
        self,
        config: StampTourConfig,
        document: Document,
        *,
        gateway: NetworkGateway | None = None,
        session: aiohttp.ClientSession | None = None,
        store: PersistentStore | None = None,
        scheduler: Scheduler | None = None,
        capabilities: CapabilityDetector | None = None,
        notifier: Notifier | None = None,
        location: PageLocation | None = None,
    ) -> None:
        self._config = config
        self._document = document
        self._gateway = gateway
        self._external_session = session is not None
        self._http_session = session
        self._store: PersistentStore = store if store is not None else MemoryStore()
        self._scheduler: Scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._notifier: Notifier = notifier if notifier is not None else LoggingNotifier()
        self._location = location or PageLocation()
        self._profile = detect_device_profile(
            capabilities or StaticCapabilities(),
            wide_screen_width=config.wide_screen_width,
        )
        self._components: PageComponents | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> StampTourPage:
        if self._gateway is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._gateway = HttpGateway(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._components is not None:
            self._components.sync.stop()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._gateway = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def profile(self) -> DeviceProfile:
        return self._profile

    @property
    def components(self) -> PageComponents:
        if self._components is None:
            raise StampTourError("Page not initialized. Call 'await page.init()' first")
        return self._components

    def _require_gateway(self) -> NetworkGateway:
        if self._gateway is None:
            raise StampTourError("Page not initialized. Use 'async with StampTourPage(...) as page:'")
        return self._gateway

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def _build(self, gateway: NetworkGateway) -> PageComponents:
        document = self._document
        navigator = MapNavigator(self._config, document, self._profile)
        # Fail fast, naming every missing anchor at once.
        document.require(*PAGE_ANCHORS, *navigator.required_anchors())

        container, stamp_list, class_modal, class_title, class_close = document.require(
            STAMP_PANEL,
            STAMP_LIST,
            CLASS_INFO_MODAL,
            CLASS_INFO_TITLE,
            CLASS_INFO_CLOSE,
        )
        panel = StampPanel(document, container, stamp_list)
        return PageComponents(
            panel=panel,
            guide=TourController(
                self._config,
                GuideAnchors.resolve(document),
                self._profile,
                gateway,
                self._store,
                self._scheduler,
                self._notifier,
            ),
            classrooms=ClassroomDirectory(
                document,
                self._notifier,
                modal=class_modal,
                title=class_title,
                close_button=class_close,
            ),
            navigator=navigator,
            gestures=GestureRouter(panel),
            sync=StampSyncEngine(
                self._store,
                panel,
                self._scheduler,
                interval=self._config.sync_interval,
            ),
        )

    async def init(self) -> None:
        """Wire the page, start the sync loop and load the catalogs.

        Raises
        ------
        MissingAnchorError
            If the document lacks any element the page needs.
        """
        if self._components is not None:
            return
        gateway = self._require_gateway()
        components = self._build(gateway)
        self._components = components

        (show_guide_button,) = self._document.require(SHOW_GUIDE_BUTTON)
        components.panel.bind(show_guide_button, lambda: self._scheduler.spawn(components.guide.begin()))
        components.guide.bind()
        components.classrooms.bind()
        components.navigator.mount_all()
        components.navigator.apply_hash(self._location.hash)
        components.gestures.bind()
        components.sync.start()

        if self._store.get(GUIDE_SHOWN_KEY) is None:
            await components.guide.begin()

        await asyncio.gather(self.load_stamps(), self.load_classrooms())

    async def load_stamps(self) -> list[Stamp]:
        """Fetch the stamp catalog and render it; failures are reported, not raised."""
        try:
            stamps = await fetch_stamp_list(self._require_gateway())
        except StampTourTransportError:
            _logger.warning("Failed to load stamp list", exc_info=True)
            self._notifier.notify(STAMP_LIST_FAILED_NOTICE)
            return []
        self.components.panel.render(stamps)
        return stamps

    async def load_classrooms(self) -> list[Classroom]:
        """Fetch the booth classrooms and activate their markers."""
        try:
            classrooms = await fetch_class_list(self._require_gateway())
        except StampTourTransportError:
            _logger.warning("Failed to load classroom list", exc_info=True)
            self._notifier.notify(CLASS_LIST_FAILED_NOTICE)
            return []
        self.components.classrooms.apply_class_list(classrooms)
        return classrooms
