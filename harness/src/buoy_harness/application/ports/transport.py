"""Port describing the bidirectional event channel an actor talks through."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

from buoy_harness.json_types import JsonObject, JsonValue

LifecycleHandler = Callable[[], Awaitable[None]]
AckCallback = Callable[[JsonValue], None]


class TransportPort(Protocol):
    """Event-based channel with acknowledged emits.

    Implementations invoke ``callback`` at most once, with the payload the
    server attached to that specific emit.
    """

    @property
    def connected(self) -> bool:
        """Return True while the channel is open."""

    def on(self, event: str, handler: LifecycleHandler) -> None:
        """Register a handler for a lifecycle event (``connect``/``disconnect``)."""

    async def connect(self, url: str) -> None:
        """Open the channel; raises ``TransportError`` when unreachable."""

    async def emit(self, event: str, payload: JsonObject, callback: AckCallback) -> None:
        """Send ``payload``; raises ``TransportError`` when the channel is closed."""

    async def disconnect(self) -> None:
        """Close the channel."""


TransportFactory = Callable[[int], TransportPort]


__all__ = ["AckCallback", "LifecycleHandler", "TransportFactory", "TransportPort"]
