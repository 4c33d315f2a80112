"""Debounced autosave for one editable document.

State machine: ``clean -> dirty -> saving -> clean``. Every ``touch`` restarts
a cancellable delay; when it expires the latest value is written. ``flush``
writes immediately and ``cancel`` drops whatever is pending. A write that has
already started is never interrupted.
"""
from __future__ import annotations

import asyncio
import contextlib
import inspect
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from tracker.core.logging import get_logger

logger = get_logger(__name__)

CLEAN = "clean"
DIRTY = "dirty"
SAVING = "saving"

SaveCallback = Callable[[Any], Any]


class AutosaveDocument:
    """Coalesces rapid edits of one document into a single write."""

    def __init__(self, name: str, save: SaveCallback, delay: float = 1.0) -> None:
        self.name = name
        self.delay = delay
        self._save = save
        self._timer: Optional[asyncio.Task] = None
        self._inflight: Optional[asyncio.Task] = None
        self._pending: Any = None
        self._generation = 0
        self.state = CLEAN
        self.last_saved: Optional[datetime] = None
        self.last_error: Optional[str] = None

    @property
    def is_saving(self) -> bool:
        return self.state == SAVING

    @property
    def has_pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def touch(self, value: Any) -> None:
        """Record a new value and restart the debounce timer.

        Needs a running event loop.
        """
        self._cancel_timer()
        self._generation += 1
        self._pending = value
        self.state = DIRTY
        self._timer = asyncio.get_running_loop().create_task(
            self._save_later(value, self._generation), name=f"autosave-{self.name}"
        )

    async def flush(self, value: Any = None) -> bool:
        """Save now, skipping the debounce. Uses the pending value unless given one."""
        self._cancel_timer()
        if value is None:
            value = self._pending
        if value is None:
            return False
        await self._settle(self._inflight)
        return await self._run_save(value, self._generation)

    def cancel(self) -> None:
        """Drop a pending save without writing it."""
        self._cancel_timer()
        self._pending = None
        if self.state == DIRTY:
            self.state = CLEAN

    async def wait(self) -> None:
        """Wait until the scheduled save, and any write it started, is done."""
        for task in (self._timer, self._inflight):
            await self._settle(task)

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    @staticmethod
    async def _settle(task: Optional[asyncio.Task]) -> None:
        if task is not None and task is not asyncio.current_task():
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _save_later(self, value: Any, generation: int) -> None:
        await asyncio.sleep(self.delay)
        # From here on the write is in flight and no longer cancellable
        previous = self._inflight
        self._inflight = asyncio.current_task()
        self._timer = None
        try:
            # Writes of one document land in the order they were started
            await self._settle(previous)
            await self._run_save(value, generation)
        finally:
            if self._inflight is asyncio.current_task():
                self._inflight = None

    async def _run_save(self, value: Any, generation: int) -> bool:
        self.state = SAVING
        try:
            result = self._save(value)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self.last_error = str(e)
            self.state = DIRTY
            logger.error(f"Autosave of {self.name} failed: {e}")
            return False

        self.last_error = None
        self.last_saved = datetime.now(timezone.utc)
        if generation == self._generation:
            self._pending = None
            self.state = CLEAN
        else:
            # Edited again while the write was running
            self.state = DIRTY
        return True
