"""Command-line entrypoint: ``buoy-harness <actors>``."""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence

from pydantic import ValidationError

from buoy_harness.config.harness import HarnessSettings
from buoy_harness.infrastructure.console.stdin import StreamLineSource
from buoy_harness.observability.logging import configure_logging
from buoy_harness.runtime.bootstrap import build_runtime, run_harness


def _actor_count(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        count = 0
    if count < 1:
        raise argparse.ArgumentTypeError(f"expected a positive number of actors, got {value!r}")
    return count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buoy-harness",
        description=(
            "Spin up simulated chat actors and drive them from stdin. Commands: "
            "'joinRoom' (all actors), '<index> joinRoom', '<index> beginChat', '<index> endChat'."
        ),
    )
    parser.add_argument("actors", type=_actor_count, help="Number of actors to spin up.")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(list(argv) if argv is not None else None)

    configure_logging()
    try:
        settings = HarnessSettings.load()
    except ValidationError as exc:
        raise SystemExit(f"invalid harness configuration: {exc}") from exc

    context = build_runtime(settings, actor_count=args.actors)
    try:
        asyncio.run(run_harness(context, StreamLineSource()))
    except Exception as exc:
        raise SystemExit(str(exc)) from exc


__all__ = ["build_parser", "main"]
