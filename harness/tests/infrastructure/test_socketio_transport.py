from __future__ import annotations

import pytest
from socketio import exceptions as socketio_exceptions

from buoy_harness.errors import TransportError
from buoy_harness.infrastructure.transport.socketio_transport import (
    SocketIoTransport,
    create_socketio_transport,
)
from buoy_harness.json_types import JsonValue

pytestmark = pytest.mark.anyio("asyncio")


class StubSocketClient:
    """Stands in for ``socketio.AsyncClient``."""

    def __init__(self, *, refuse: bool = False) -> None:
        self.refuse = refuse
        self.connected = False
        self.handlers: dict[str, object] = {}
        self.connect_calls: list[tuple[str, str]] = []
        self.emits: list[tuple[str, object]] = []
        self.callbacks: list[object] = []

    def on(self, event: str, handler: object) -> None:
        self.handlers[event] = handler

    async def connect(self, url: str, socketio_path: str) -> None:
        self.connect_calls.append((url, socketio_path))
        if self.refuse:
            raise socketio_exceptions.ConnectionError("Connection refused by the server")
        self.connected = True

    async def emit(self, event: str, data: object, callback: object) -> None:
        if not self.connected:
            raise socketio_exceptions.BadNamespaceError("/ is not a connected namespace.")
        self.emits.append((event, data))
        self.callbacks.append(callback)

    async def disconnect(self) -> None:
        self.connected = False


async def test_connect_passes_socketio_path() -> None:
    client = StubSocketClient()
    transport = SocketIoTransport(socketio_path="buoy/socket.io", client=client)  # type: ignore[arg-type]

    await transport.connect("http://buoy.test")

    assert client.connect_calls == [("http://buoy.test", "buoy/socket.io")]
    assert transport.connected


async def test_refused_connection_becomes_transport_error() -> None:
    transport = SocketIoTransport(client=StubSocketClient(refuse=True))  # type: ignore[arg-type]

    with pytest.raises(TransportError, match="could not connect"):
        await transport.connect("http://buoy.test")


async def test_emit_adapts_acknowledgement_arguments() -> None:
    client = StubSocketClient()
    transport = SocketIoTransport(client=client)  # type: ignore[arg-type]
    await transport.connect("http://buoy.test")
    received: list[JsonValue] = []

    await transport.emit("call", {"name": "fetchRooms"}, received.append)
    await transport.emit("call", {"name": "setProfile"}, received.append)
    client.callbacks[0]([{"id": "lobby"}], "extra")  # type: ignore[operator]
    client.callbacks[1]()  # type: ignore[operator]

    assert client.emits == [("call", {"name": "fetchRooms"}), ("call", {"name": "setProfile"})]
    assert received == [[{"id": "lobby"}], None]


async def test_emit_while_disconnected_becomes_transport_error() -> None:
    transport = SocketIoTransport(client=StubSocketClient())  # type: ignore[arg-type]

    with pytest.raises(TransportError, match="not connected"):
        await transport.emit("call", {"name": "join"}, lambda _response: None)


async def test_lifecycle_handlers_ignore_event_arguments() -> None:
    client = StubSocketClient()
    transport = SocketIoTransport(client=client)  # type: ignore[arg-type]
    fired: list[str] = []

    async def _on_disconnect() -> None:
        fired.append("disconnect")

    transport.on("disconnect", _on_disconnect)
    await client.handlers["disconnect"]("server disconnect")  # type: ignore[operator]

    assert fired == ["disconnect"]


async def test_disconnect_is_skipped_when_closed() -> None:
    client = StubSocketClient()
    transport = SocketIoTransport(client=client)  # type: ignore[arg-type]

    await transport.disconnect()
    await transport.connect("http://buoy.test")
    await transport.disconnect()

    assert not transport.connected


def test_factory_builds_client_without_reconnection() -> None:
    transport = create_socketio_transport(0, socketio_path="socket.io")

    assert transport._client.reconnection is False
    assert not transport.connected
