from __future__ import annotations

import pytest
from conftest import FakeScheduler

from stamptour.models.stamp import Stamp
from stamptour.panel import StampPanel
from stamptour.store import CookieStore, MemoryStore
from stamptour.sync import StampSyncEngine
from stamptour.view import Document


def _panel(document: Document) -> StampPanel:
    container, stamp_list = document.require("StampView", "stampList")
    panel = StampPanel(document, container, stamp_list)
    panel.render(
        [
            Stamp(stamp_id="A1", stamp_name="Science Lab", stamp_location="1F east"),
            Stamp(stamp_id="B2", stamp_name="Library", stamp_location="2F"),
        ]
    )
    return panel


class _FlakyStore(MemoryStore):
    def __init__(self) -> None:
        super().__init__()
        self.failures = 1

    def get(self, key: str) -> str | None:
        if self.failures:
            self.failures -= 1
            raise RuntimeError("storage unavailable")
        return super().get(key)


def test_tick_without_record_changes_nothing(document: Document, store: MemoryStore, scheduler: FakeScheduler) -> None:
    panel = _panel(document)
    engine = StampSyncEngine(store, panel, scheduler)

    assert engine.tick() == []
    assert not panel.is_checked("A1")


def test_tick_marks_recorded_stamps_once(document: Document, store: MemoryStore, scheduler: FakeScheduler) -> None:
    panel = _panel(document)
    engine = StampSyncEngine(store, panel, scheduler)
    store.set("LocalStamp", '["A1"]', 30)

    assert engine.tick() == ["A1"]
    classes_after_first = list(panel.entry("A1").classes)

    assert engine.tick() == []
    assert panel.entry("A1").classes == classes_after_first
    assert panel.is_checked("A1")
    assert not panel.is_checked("B2")


def test_tick_ignores_unknown_stamp_ids(document: Document, store: MemoryStore, scheduler: FakeScheduler) -> None:
    panel = _panel(document)
    engine = StampSyncEngine(store, panel, scheduler)
    store.set("LocalStamp", '["Z9","B2"]', 30)

    assert engine.tick() == ["B2"]
    assert panel.entry("Z9") is None


def test_malformed_record_skips_tick_and_keeps_checks(
    document: Document,
    store: MemoryStore,
    scheduler: FakeScheduler,
) -> None:
    panel = _panel(document)
    engine = StampSyncEngine(store, panel, scheduler)
    store.set("LocalStamp", '["A1"]', 30)
    engine.tick()

    store.set("LocalStamp", "{not json", 30)

    assert engine.tick() == []
    assert panel.is_checked("A1")


def test_tick_reads_uri_encoded_cookie_record(document: Document, scheduler: FakeScheduler) -> None:
    store = CookieStore()
    panel = _panel(document)
    engine = StampSyncEngine(store, panel, scheduler)
    store.set("LocalStamp", '["A1","B2"]', 30)

    assert store.get("LocalStamp") == "%5B%22A1%22%2C%22B2%22%5D"
    assert engine.tick() == ["A1", "B2"]


def test_started_engine_polls_every_interval(document: Document, store: MemoryStore, scheduler: FakeScheduler) -> None:
    panel = _panel(document)
    engine = StampSyncEngine(store, panel, scheduler, interval=1.0)
    engine.start()
    engine.start()

    assert engine.is_running
    assert scheduler.pending == 1

    store.set("LocalStamp", '["A1"]', 30)
    scheduler.advance(0.5)
    assert not panel.is_checked("A1")

    scheduler.advance(0.5)
    assert panel.is_checked("A1")

    store.set("LocalStamp", '["A1","B2"]', 30)
    scheduler.advance(1.0)
    assert panel.is_checked("B2")


def test_stopped_engine_no_longer_applies_record(
    document: Document,
    store: MemoryStore,
    scheduler: FakeScheduler,
) -> None:
    panel = _panel(document)
    engine = StampSyncEngine(store, panel, scheduler)
    engine.start()
    engine.stop()

    store.set("LocalStamp", '["A1"]', 30)
    scheduler.advance(3.0)

    assert not engine.is_running
    assert not panel.is_checked("A1")


def test_failing_tick_does_not_stop_the_loop(document: Document, scheduler: FakeScheduler) -> None:
    store = _FlakyStore()
    panel = _panel(document)
    engine = StampSyncEngine(store, panel, scheduler)
    store.set("LocalStamp", '["A1"]', 30)
    engine.start()

    scheduler.advance(1.0)
    assert not panel.is_checked("A1")

    scheduler.advance(1.0)
    assert panel.is_checked("A1")


@pytest.mark.parametrize("raw", ['["A1","A1"]', "%5B%22A1%22%2C%22A1%22%5D"])
def test_duplicate_ids_are_checked_once(document: Document, scheduler: FakeScheduler, raw: str) -> None:
    store = MemoryStore()
    panel = _panel(document)
    engine = StampSyncEngine(store, panel, scheduler)
    store.set("LocalStamp", raw, 30)

    assert engine.tick() == ["A1"]
