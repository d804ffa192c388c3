"""Repeating background task bound to the running event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger("buoy_harness.ticker")


class RepeatingTask:
    """Invoke ``action`` every ``interval`` seconds until cancelled.

    The first tick happens one interval after ``start``. ``action`` must not
    block; slow work belongs in tasks it spawns.
    """

    def __init__(self, action: Callable[[], None], *, interval: float, name: str) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._action = action
        self._interval = interval
        self._name = name
        self._task: asyncio.Task[None] | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        task = self._task
        return bool(task is not None and not task.done())

    def start(self) -> None:
        """Start ticking (idempotent)."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=self._name)

    def cancel(self) -> bool:
        """Stop ticking; returns False when nothing was running."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return False
        task.cancel()
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.ticks += 1
            try:
                self._action()
            except Exception:
                logger.exception("tick failed", extra={"data": {"task": self._name}})


__all__ = ["RepeatingTask"]
