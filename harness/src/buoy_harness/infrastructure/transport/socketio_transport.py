"""Socket.IO adapter for the actor transport port."""

from __future__ import annotations

import logging

import socketio
from socketio import exceptions as socketio_exceptions

from buoy_harness.application.ports.transport import AckCallback, LifecycleHandler, TransportPort
from buoy_harness.errors import TransportError
from buoy_harness.json_types import JsonObject, JsonValue

logger = logging.getLogger("buoy_harness.transport")


class SocketIoTransport(TransportPort):
    """Wraps ``socketio.AsyncClient`` with reconnection disabled."""

    def __init__(
        self,
        *,
        socketio_path: str = "socket.io",
        client: socketio.AsyncClient | None = None,
    ) -> None:
        self._client = client or socketio.AsyncClient(reconnection=False)
        self._socketio_path = socketio_path

    @property
    def connected(self) -> bool:
        return bool(self._client.connected)

    def on(self, event: str, handler: LifecycleHandler) -> None:
        # Socket.IO passes event-specific arguments (e.g. a disconnect reason)
        # that the lifecycle handlers do not take.
        async def _handler(*_args: object) -> None:
            await handler()

        self._client.on(event, _handler)

    async def connect(self, url: str) -> None:
        try:
            await self._client.connect(url, socketio_path=self._socketio_path)
        except socketio_exceptions.ConnectionError as exc:
            raise TransportError(f"could not connect to {url}: {exc}") from exc

    async def emit(self, event: str, payload: JsonObject, callback: AckCallback) -> None:
        def _ack(*args: JsonValue) -> None:
            callback(args[0] if args else None)

        try:
            await self._client.emit(event, payload, callback=_ack)
        except socketio_exceptions.BadNamespaceError as exc:
            raise TransportError(f"cannot emit {event!r}: transport is not connected") from exc

    async def disconnect(self) -> None:
        if not self._client.connected:
            logger.debug("disconnect skipped; transport already closed")
            return
        await self._client.disconnect()


def create_socketio_transport(_actor_id: int, *, socketio_path: str = "socket.io") -> SocketIoTransport:
    """Transport factory; each actor gets its own client."""
    return SocketIoTransport(socketio_path=socketio_path)


__all__ = ["SocketIoTransport", "create_socketio_transport"]
