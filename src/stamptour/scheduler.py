"""Timer and task scheduling on the running event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any, Protocol, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScheduledHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Structural scheduling interface.

    All callbacks run on the single event-loop thread and run to completion,
    so state they mutate is never observed half-updated.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle:
        ...

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledHandle:
        ...

    def spawn(self, coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
        ...


class _RepeatingHandle:
    """Re-arms ``loop.call_later`` after every run until cancelled."""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._timer: asyncio.TimerHandle | None = None
        self._cancelled = False

    def start(self) -> None:
        self._timer = self._loop.call_later(self._interval, self._run)

    def _run(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception:
            _logger.exception("Repeating callback %r failed", self._callback)
        if not self._cancelled:
            self.start()

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler:
    """:class:`Scheduler` backed by the running asyncio loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._tasks: set[asyncio.Task[Any]] = set()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(delay, callback)

    def call_every(self, interval: float, callback: Callable[[], None]) -> _RepeatingHandle:
        handle = _RepeatingHandle(self._get_loop(), interval, callback)
        handle.start()
        return handle

    def spawn(self, coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
        task = self._get_loop().create_task(coro)
        # The loop only keeps weak references to tasks.
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Background task %r failed", task, exc_info=exc)
