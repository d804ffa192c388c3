"""Runtime wiring: settings to registry, dispatcher and monitor."""

from __future__ import annotations

import functools
import logging
import random
from collections.abc import AsyncIterable
from dataclasses import dataclass

from buoy_harness.application.dispatcher import CommandDispatcher, DispatchOutcome
from buoy_harness.application.ports.decorations import DecorationPoolPort
from buoy_harness.application.ports.transport import TransportFactory
from buoy_harness.application.registry import ActorRegistry
from buoy_harness.application.session import ActorSession
from buoy_harness.application.stall_monitor import StalledCallMonitor
from buoy_harness.config.harness import HarnessSettings
from buoy_harness.infrastructure.decorations import EmojiDecorationPool
from buoy_harness.infrastructure.transport.socketio_transport import create_socketio_transport

logger = logging.getLogger("buoy_harness.runtime")


@dataclass(frozen=True, slots=True)
class RuntimeContext:
    """Everything the harness needs for one interactive run."""

    settings: HarnessSettings
    registry: ActorRegistry
    dispatcher: CommandDispatcher
    monitor: StalledCallMonitor


def build_runtime(
    settings: HarnessSettings,
    *,
    actor_count: int,
    transport_factory: TransportFactory | None = None,
    decorations: DecorationPoolPort | None = None,
    rng: random.Random | None = None,
) -> RuntimeContext:
    """Create ``actor_count`` actors and the components that drive them."""
    make_transport: TransportFactory = (
        transport_factory
        if transport_factory is not None
        else functools.partial(create_socketio_transport, socketio_path=settings.socketio_path)
    )
    pool = decorations if decorations is not None else EmojiDecorationPool()
    shared_rng = rng if rng is not None else random.Random()

    def _session(actor_id: int) -> ActorSession:
        return ActorSession(
            actor_id,
            transport=make_transport(actor_id),
            url=settings.buoy_url,
            invite_code=settings.invite_code_value,
            decorations=pool,
            chat_interval=settings.chat_interval_seconds,
            rng=shared_rng,
        )

    registry = ActorRegistry.spawn(actor_count, _session)
    return RuntimeContext(
        settings=settings,
        registry=registry,
        dispatcher=CommandDispatcher(registry),
        monitor=StalledCallMonitor(
            registry=registry,
            warning_after_seconds=settings.stall_warning_seconds,
            poll_interval_seconds=settings.stall_check_interval_seconds,
        ),
    )


async def run_harness(context: RuntimeContext, lines: AsyncIterable[str]) -> DispatchOutcome:
    """Connect every actor, serve operator commands, then tear down."""
    await context.registry.connect_all()
    context.monitor.start()
    try:
        return await context.dispatcher.run(lines)
    finally:
        await context.monitor.stop()
        await context.registry.aclose()
        logger.info("harness stopped", extra={"data": {"actors": len(context.registry)}})


__all__ = ["RuntimeContext", "build_runtime", "run_harness"]
