"""Outstanding request bookkeeping for a single actor."""

from __future__ import annotations

import asyncio
import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass

from buoy_harness.json_types import JsonValue

Clock = Callable[[], float]


@dataclass(slots=True)
class PendingCall:
    """One request awaiting its single correlated response."""

    call_id: int
    method: str
    issued_at: float
    future: asyncio.Future[JsonValue]

    @property
    def settled(self) -> bool:
        return self.future.done()

    def resolve(self, payload: JsonValue) -> bool:
        """Complete the call; later deliveries are ignored."""
        if self.future.done():
            return False
        self.future.set_result(payload)
        return True

    def age(self, now: float) -> float:
        return max(0.0, now - self.issued_at)


class PendingCallTable:
    """Pending calls keyed by a local sequence number.

    Nothing here times out: a call whose response never arrives stays in the
    table until the process exits, where ``stalled`` can report it.
    """

    def __init__(self, *, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._ids = itertools.count()
        self._pending: dict[int, PendingCall] = {}

    def issue(self, method: str) -> PendingCall:
        loop = asyncio.get_running_loop()
        call = PendingCall(
            call_id=next(self._ids),
            method=method,
            issued_at=self._clock(),
            future=loop.create_future(),
        )
        self._pending[call.call_id] = call
        return call

    def settle(self, call: PendingCall, payload: JsonValue) -> bool:
        """Resolve ``call`` with ``payload`` and drop it from the table."""
        self._pending.pop(call.call_id, None)
        return call.resolve(payload)

    @property
    def pending(self) -> tuple[PendingCall, ...]:
        return tuple(self._pending.values())

    def age_of(self, call: PendingCall) -> float:
        return call.age(self._clock())

    def stalled(self, *, older_than: float) -> tuple[PendingCall, ...]:
        now = self._clock()
        return tuple(call for call in self._pending.values() if call.age(now) >= older_than)

    def __len__(self) -> int:
        return len(self._pending)


__all__ = ["Clock", "PendingCall", "PendingCallTable"]
