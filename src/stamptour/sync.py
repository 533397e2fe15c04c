"""Polling sync from the collected-stamp record to the stamp panel."""

from __future__ import annotations

import logging

from stamptour._constants import STAMP_RECORD_KEY
from stamptour.exceptions import MalformedRecordError
from stamptour.panel import StampPanel
from stamptour.records import decode_stamp_record
from stamptour.scheduler import ScheduledHandle, Scheduler
from stamptour.store import PersistentStore

_logger = logging.getLogger(__name__)


class StampSyncEngine:
    """Marks panel entries ``checked`` for every id in the persisted record.

    The sync is one-way: the record is written elsewhere (the scan flow) and
    the panel only ever gains checks.
    """

    def __init__(
        self,
        store: PersistentStore,
        panel: StampPanel,
        scheduler: Scheduler,
        *,
        interval: float = 1.0,
        record_key: str = STAMP_RECORD_KEY,
    ) -> None:
        self._store = store
        self._panel = panel
        self._scheduler = scheduler
        self._interval = interval
        self._record_key = record_key
        self._handle: ScheduledHandle | None = None

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def tick(self) -> list[str]:
        """Run one sync pass; returns the ids that became checked."""
        _logger.debug("Checking for stamp updates")
        raw = self._store.get(self._record_key)
        if raw is None:
            return []
        try:
            record = decode_stamp_record(raw)
        except MalformedRecordError:
            _logger.warning("Skipping sync tick: malformed %s record", self._record_key, exc_info=True)
            return []
        return [stamp_id for stamp_id in record if self._panel.mark_checked(stamp_id)]

    def _safe_tick(self) -> None:
        try:
            newly_checked = self.tick()
        except Exception:
            _logger.exception("Stamp sync tick failed")
            return
        if newly_checked:
            _logger.debug("Checked stamps %s", newly_checked)

    def start(self) -> None:
        if self._handle is not None:
            return
        self._handle = self._scheduler.call_every(self._interval, self._safe_tick)

    def stop(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()
