from __future__ import annotations

import asyncio

import pytest

from buoy_harness.application.ticker import RepeatingTask

pytestmark = pytest.mark.anyio("asyncio")


async def test_ticks_until_cancelled() -> None:
    fired: list[int] = []
    task = RepeatingTask(lambda: fired.append(1), interval=0.01, name="test-ticker")

    task.start()
    await asyncio.sleep(0.055)
    assert task.cancel() is True
    count = len(fired)
    await asyncio.sleep(0.03)

    assert count >= 2
    assert task.ticks == count
    assert len(fired) == count
    assert not task.running


async def test_start_is_idempotent() -> None:
    fired: list[int] = []
    task = RepeatingTask(lambda: fired.append(1), interval=0.05, name="test-ticker")

    task.start()
    task.start()
    await asyncio.sleep(0.07)
    task.cancel()

    assert len(fired) == 1


async def test_cancel_without_start_is_noop() -> None:
    task = RepeatingTask(lambda: None, interval=0.01, name="test-ticker")

    assert task.cancel() is False


async def test_failing_action_keeps_ticking(caplog: pytest.LogCaptureFixture) -> None:
    calls: list[int] = []

    def _action() -> None:
        calls.append(1)
        raise RuntimeError("boom")

    task = RepeatingTask(_action, interval=0.01, name="test-ticker")
    task.start()
    await asyncio.sleep(0.045)
    task.cancel()

    assert len(calls) >= 2
    assert "tick failed" in caplog.text


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError, match="interval"):
        RepeatingTask(lambda: None, interval=0.0, name="test-ticker")
