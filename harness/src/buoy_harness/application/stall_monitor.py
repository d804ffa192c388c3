"""Background detector for calls whose response never arrived."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from buoy_harness.application.calls import PendingCall
from buoy_harness.application.registry import ActorRegistry

logger = logging.getLogger("buoy_harness.calls")


@dataclass(frozen=True, slots=True)
class StalledCall:
    actor_id: int
    call_id: int
    method: str
    age_seconds: float


class StalledCallMonitor:
    """Async worker that reports pending calls older than a threshold.

    Reporting is the only effect: stalled calls are never failed, retried or
    cancelled, so callers waiting on them stay suspended. Each call is
    reported once.
    """

    worker_name = "harness-stalled-call-monitor"

    def __init__(
        self,
        *,
        registry: ActorRegistry,
        warning_after_seconds: float,
        poll_interval_seconds: float,
    ) -> None:
        self._registry = registry
        self._warning_after = warning_after_seconds
        self._poll_interval = poll_interval_seconds
        self._reported: set[tuple[int, int]] = set()
        self._stop = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    def start(self) -> None:
        """Start the monitor task (idempotent)."""
        if self._task is not None and not self._task.done():
            return
        self._stop.clear()
        self._task = asyncio.create_task(self._run(), name=self.worker_name)

    async def stop(self, *, timeout: float = 5.0) -> None:
        """Request stop and wait for termination."""
        task = self._task
        if task is None:
            return
        self._stop.set()
        try:
            await asyncio.wait_for(task, timeout=timeout)
        finally:
            self._task = None

    @property
    def running(self) -> bool:
        task = self._task
        return bool(task is not None and not task.done())

    def check(self) -> tuple[StalledCall, ...]:
        """Return and log calls that became stalled since the last check."""
        found: list[StalledCall] = []
        live: set[tuple[int, int]] = set()
        for session in self._registry:
            now_stalled = session.calls.stalled(older_than=self._warning_after)
            for call in session.calls.pending:
                live.add((session.id, call.call_id))
            for call in now_stalled:
                key = (session.id, call.call_id)
                if key in self._reported:
                    continue
                self._reported.add(key)
                found.append(self._report(session.id, call, session.calls.age_of(call)))
        # Forget calls that have since settled.
        self._reported &= live
        return tuple(found)

    def _report(self, actor_id: int, call: PendingCall, age: float) -> StalledCall:
        stalled = StalledCall(
            actor_id=actor_id,
            call_id=call.call_id,
            method=call.method,
            age_seconds=round(age, 3),
        )
        logger.warning(
            "call %s has no response after %.1fs",
            call.method,
            age,
            extra={"actor": actor_id, "data": {"call_id": call.call_id}},
        )
        return stalled

    async def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.check()
            except Exception:
                logger.exception("stalled call check failed")
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self._poll_interval)
            except TimeoutError:
                continue


__all__ = ["StalledCall", "StalledCallMonitor"]
