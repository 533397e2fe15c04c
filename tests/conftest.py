from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from stamptour.config import StampTourConfig
from stamptour.exceptions import StampTourTransportError
from stamptour.store import MemoryStore
from stamptour.view import Document, Element, MediaElement

DEFAULT_ROUTES: dict[str, Any] = {
    "/api/stampList.json": {
        "stampList": [
            {"stampId": "A1", "stampName": "Science Lab", "stampLocation": "1F east"},
            {"stampId": "B2", "stampName": "Library", "stampLocation": "2F"},
            {"stampId": "C3", "stampName": "Gym", "stampLocation": "3F", "stampDesc": "Basketball"},
        ]
    },
    "/api/classList.json": {"classList": [{"classId": "101"}, {"classId": "201"}, {"classId": "999"}]},
}


@dataclass
class _Timer:
    due: float
    seq: int
    callback: Callable[[], None]
    interval: float | None = None
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Virtual-time scheduler: timers only fire from :meth:`advance`."""

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: list[_Timer] = []
        self._seq = 0
        self.tasks: list[asyncio.Task[Any]] = []

    def _add(self, delay: float, callback: Callable[[], None], interval: float | None) -> _Timer:
        self._seq += 1
        timer = _Timer(due=self.now + delay, seq=self._seq, callback=callback, interval=interval)
        self._timers.append(timer)
        return timer

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Timer:
        return self._add(delay, callback, None)

    def call_every(self, interval: float, callback: Callable[[], None]) -> _Timer:
        return self._add(interval, callback, interval)

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro)
        self.tasks.append(task)
        return task

    async def drain(self) -> None:
        while self.tasks:
            tasks, self.tasks = self.tasks, []
            await asyncio.gather(*tasks)

    @property
    def pending(self) -> int:
        return sum(1 for timer in self._timers if not timer.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self._timers if not t.cancelled and t.due <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self.now = timer.due
            if timer.interval is None:
                self._timers.remove(timer)
            else:
                timer.due += timer.interval
            timer.callback()
        self.now = target


@dataclass
class FakeGateway:
    routes: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_ROUTES))
    failures: dict[str, int] = field(default_factory=dict)
    login_response: Any = field(default_factory=lambda: {"user_id": "42", "user_name": "12345Kim"})
    calls: list[tuple[str, str, Any]] = field(default_factory=list)

    def _maybe_fail(self, endpoint: str) -> None:
        status = self.failures.get(endpoint)
        if status is not None:
            raise StampTourTransportError(f"HTTP {status} from {endpoint}", status_code=status, endpoint=endpoint)

    async def get_json(self, endpoint: str) -> Any:
        self.calls.append(("GET", endpoint, None))
        self._maybe_fail(endpoint)
        if endpoint not in self.routes:
            raise StampTourTransportError(f"HTTP 404 from {endpoint}", status_code=404, endpoint=endpoint)
        return self.routes[endpoint]

    async def post_json(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        self.calls.append(("POST", endpoint, dict(body)))
        self._maybe_fail(endpoint)
        return self.login_response


@dataclass
class RecordingNotifier:
    messages: list[str] = field(default_factory=list)

    def notify(self, message: str) -> None:
        self.messages.append(message)


def build_page_document(floor_count: int = 4, *, omit: frozenset[str] = frozenset()) -> Document:
    """Minimal host page carrying every anchor the page components use."""
    root = Element("body")

    def add(parent: Element, tag: str, element_id: str | None = None, *classes: str) -> Element:
        if element_id in omit:
            return Element(tag, None, classes)
        element = MediaElement(tag, element_id, classes) if tag == "video" else Element(tag, element_id, classes)
        return parent.append(element)

    panel = add(root, "div", "StampView")
    add(panel, "button", "ShowGuideButton", "LinkButton")
    add(panel, "div", "stampList", "stampList")

    modal = add(root, "div", "GuideModalContainer")
    modal.display = "none"
    add(modal, "h1", "GuideTitle").text = "How to take part"
    add(modal, "video", "GuideVideo")
    add(modal, "p", "GuideHint")
    add(modal, "p", "GuideText")
    replay_container = add(modal, "div", "ReplayButtonContainer")
    replay_container.visibility = "hidden"
    add(replay_container, "button", "ReplayGuideButton")
    add(modal, "div", "PrivacyPolicyCheckboxContainer").display = "none"
    add(modal, "input", "StudentIdInput").display = "none"
    add(modal, "input", "StudentNameInput").display = "none"
    add(modal, "button", "NextGuideButton").text = "Next"

    class_modal = add(root, "div", "ClassInfoModalContainer")
    class_modal.display = "none"
    add(class_modal, "h2", "ClassInfoModalTitle")
    add(class_modal, "button", "ClassInfoModalCloseButton")

    for floor in range(1, floor_count + 1):
        add(root, "button", f"Floor{floor}")
        surface = add(root, "svg", f"Floor{floor}MapView")
        surface.width = 400.0
        surface.height = 300.0
        group = add(surface, "g", None)
        add(group, "rect", f"{floor}01", "classroom")
        add(group, "rect", f"{floor}02", "notClassroom")
        add(group, "rect", f"hall{floor}", "hallway")

    return Document(root)


@pytest.fixture
def document() -> Document:
    return build_page_document()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def config() -> StampTourConfig:
    return StampTourConfig()
