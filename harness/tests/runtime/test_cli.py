from __future__ import annotations

from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

import pytest

from buoy_harness.runtime.cli import build_parser, main


@pytest.mark.parametrize("argv", [[], ["0"], ["-3"], ["many"], ["2", "3"]])
def test_parser_rejects_bad_actor_counts(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(argv)

    assert excinfo.value.code != 0
    assert "usage: buoy-harness" in capsys.readouterr().err


def test_parser_accepts_positive_count() -> None:
    assert build_parser().parse_args(["3"]).actors == 3


def test_main_exits_on_missing_configuration(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("buoy_harness.runtime.cli.configure_logging", lambda: None)
    monkeypatch.delenv("BUOY_URL", raising=False)
    monkeypatch.delenv("INVITE_CODE", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        main(["2"])

    assert "invalid harness configuration" in str(excinfo.value.code)


def _configured(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("buoy_harness.runtime.cli.configure_logging", lambda: None)
    monkeypatch.setenv("BUOY_URL", "http://buoy.test")
    monkeypatch.setenv("INVITE_CODE", "invite")


def _run_raising(exc: BaseException) -> Callable[[Coroutine[Any, Any, Any]], None]:
    def _run(coro: Coroutine[Any, Any, Any]) -> None:
        coro.close()
        raise exc

    return _run


def test_main_turns_runtime_failure_into_exit(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _configured(monkeypatch, tmp_path)
    monkeypatch.setattr("buoy_harness.runtime.cli.asyncio.run", _run_raising(RuntimeError("socket closed")))

    with pytest.raises(SystemExit) as excinfo:
        main(["1"])

    assert excinfo.value.code == "socket closed"


def test_main_lets_keyboard_interrupt_through(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _configured(monkeypatch, tmp_path)
    monkeypatch.setattr("buoy_harness.runtime.cli.asyncio.run", _run_raising(KeyboardInterrupt()))

    with pytest.raises(KeyboardInterrupt):
        main(["1"])
