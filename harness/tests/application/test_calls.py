from __future__ import annotations

import pytest

from buoy_harness.application.calls import PendingCallTable

pytestmark = pytest.mark.anyio("asyncio")


class ManualClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


async def test_settle_resolves_future_and_forgets_call() -> None:
    table = PendingCallTable()
    call = table.issue("fetchRooms")
    assert len(table) == 1

    assert not call.settled
    assert table.settle(call, [{"id": "lobby"}]) is True
    assert call.settled

    assert await call.future == [{"id": "lobby"}]
    assert len(table) == 0


async def test_second_delivery_is_ignored() -> None:
    table = PendingCallTable()
    call = table.issue("join")
    table.settle(call, {"peerId": "a"})

    assert table.settle(call, {"peerId": "b"}) is False
    assert await call.future == {"peerId": "a"}


async def test_stalled_reports_only_old_unsettled_calls() -> None:
    clock = ManualClock()
    table = PendingCallTable(clock=clock)
    old = table.issue("fetchRooms")
    clock.now += 10.0
    fresh = table.issue("joinRoom")
    settled = table.issue("setProfile")
    table.settle(settled, None)
    clock.now += 1.0

    assert table.stalled(older_than=5.0) == (old,)
    assert table.age_of(old) == pytest.approx(11.0)
    assert table.age_of(fresh) == pytest.approx(1.0)


async def test_call_ids_are_unique_per_table() -> None:
    table = PendingCallTable()
    ids = {table.issue("sendChat").call_id for _ in range(5)}

    assert len(ids) == 5
