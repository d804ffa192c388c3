"""Simulated chat actor: one transport, one pending-call table, one lifecycle."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Coroutine, Sequence
from typing import Any

from pydantic import ValidationError

from buoy_harness.application.calls import PendingCallTable
from buoy_harness.application.dto.rpc import (
    JoinParams,
    JoinResponse,
    JoinRoomParams,
    JoinRoomResponse,
    PeerId,
    Profile,
    RoomId,
    SendChatParams,
    SetProfileParams,
    parse_rooms,
    to_params,
)
from buoy_harness.application.ports.decorations import DecorationPoolPort
from buoy_harness.application.ports.transport import TransportPort
from buoy_harness.application.ticker import RepeatingTask
from buoy_harness.domain.actor import (
    CALL_EVENT,
    DECORATION_POOL_LIMIT,
    ActorState,
    RpcMethod,
    actor_handle,
)
from buoy_harness.errors import TransportError
from buoy_harness.json_types import JsonObject, JsonValue
from buoy_harness.observability.logging import ActorLogger

_CHAT_EXITS = frozenset({ActorState.CHATTING, ActorState.IDLE, ActorState.DISCONNECTED})


class ActorSession:
    """Drives one simulated client through connect, join and chat.

    Lifecycle::

        created -> connecting -> connected -> authenticating -> authenticated
            -> room_joined -> chatting <-> idle

    ``disconnected`` is reachable from every state and is terminal.
    """

    def __init__(
        self,
        actor_id: int,
        *,
        transport: TransportPort,
        url: str,
        invite_code: str,
        decorations: DecorationPoolPort,
        chat_interval: float,
        rng: random.Random | None = None,
        calls: PendingCallTable | None = None,
    ) -> None:
        if actor_id < 0:
            raise ValueError("actor_id must be non-negative")
        self._id = actor_id
        self._transport = transport
        self._url = url
        self._invite_code = invite_code
        self._decorations = decorations
        self._chat_interval = chat_interval
        self._rng = rng if rng is not None else random.Random()
        self._calls = calls if calls is not None else PendingCallTable()
        self._state = ActorState.CREATED
        self._peer_id: PeerId | None = None
        self._room_id: RoomId | None = None
        self._chat_timer: RepeatingTask | None = None
        self._background: set[asyncio.Task[Any]] = set()
        self._log = ActorLogger(logging.getLogger("buoy_harness.actor"), actor_id)

    @property
    def id(self) -> int:
        return self._id

    @property
    def state(self) -> ActorState:
        return self._state

    @property
    def peer_id(self) -> PeerId | None:
        return self._peer_id

    @property
    def authenticated(self) -> bool:
        return self._peer_id is not None

    @property
    def room_id(self) -> RoomId | None:
        return self._room_id

    @property
    def chatting(self) -> bool:
        return self._chat_timer is not None

    @property
    def calls(self) -> PendingCallTable:
        return self._calls

    # --- lifecycle -----------------------------------------------------

    async def connect(self) -> None:
        """Open the transport and wire the lifecycle handlers."""
        if self._state is not ActorState.CREATED:
            self._log.debug("connect ignored in state %s", self._state.value)
            return

        self._transport.on("connect", self._on_transport_connect)
        self._transport.on("disconnect", self._on_transport_disconnect)
        self._transition(ActorState.CONNECTING)
        self._log.info("connecting to %s", self._url)
        try:
            await self._transport.connect(self._url)
        except TransportError as exc:
            self._log.error("could not connect to buoy: %s", exc)
            self._transition(ActorState.DISCONNECTED)

    async def authenticate(self) -> bool:
        """Send ``join`` with the invite credential and record the peer id."""
        self._transition(ActorState.AUTHENTICATING)
        raw = await self._call(RpcMethod.JOIN, to_params(JoinParams(credential=self._invite_code)))
        try:
            response = JoinResponse.from_payload(raw)
        except ValidationError as exc:
            self._log.warning("unexpected join response", extra={"data": {"error": str(exc)}})
            await self.disconnect()
            return False

        if response.failed or response.peer_id is None:
            self._log.warning("could not authenticate", extra={"data": {"error": response.error}})
            await self.disconnect()
            return False

        if self._peer_id is None:
            self._peer_id = response.peer_id
        self._transition(ActorState.AUTHENTICATED)
        self._log.info("authenticated with peerId %s", self._peer_id)
        return True

    async def join_room(self) -> bool:
        """Fetch the room list and join its first entry."""
        raw_rooms = await self._call(RpcMethod.FETCH_ROOMS)
        try:
            rooms = parse_rooms(raw_rooms)
        except ValidationError as exc:
            self._log.warning("unexpected fetchRooms response", extra={"data": {"error": str(exc)}})
            return False

        if not rooms:
            self._log.warning("could not find room to join")
            return False

        room = rooms[0]
        self._log.info("found %d rooms. joining first...", len(rooms))
        raw = await self._call(RpcMethod.JOIN_ROOM, to_params(JoinRoomParams(id=room.id)))
        try:
            response = JoinRoomResponse.from_payload(raw)
        except ValidationError as exc:
            self._log.warning("unexpected joinRoom response", extra={"data": {"error": str(exc)}})
            return False

        if response.failed:
            self._log.warning("could not join room: %s", response.message)
            return False

        self._room_id = room.id
        self._transition(ActorState.ROOM_JOINED)
        self._log.info("joined room %s", room.id)
        return True

    async def set_profile(self) -> None:
        """Advertise a random decoration and the actor's handle."""
        profile = Profile(decoration=self._pick_decoration(), handle=actor_handle(self._id))
        await self._call(RpcMethod.SET_PROFILE, to_params(SetProfileParams(profile=profile)))
        self._log.debug("profile set", extra={"data": profile.model_dump()})

    async def begin_chat(self) -> None:
        """Start the periodic ``sendChat`` timer (idempotent)."""
        if self._chat_timer is not None:
            return
        self._chat_timer = RepeatingTask(
            self._chat_tick,
            interval=self._chat_interval,
            name=f"actor-{self._id}-chat",
        )
        self._chat_timer.start()
        self._transition(ActorState.CHATTING)
        self._log.info("chat started")

    async def end_chat(self) -> None:
        """Cancel the chat timer if one is active (idempotent)."""
        timer = self._chat_timer
        if timer is None:
            return
        self._chat_timer = None
        timer.cancel()
        self._transition(ActorState.IDLE)
        self._log.info("chat ended")

    async def disconnect(self) -> None:
        """Close the transport; an active chat timer keeps running."""
        await self._transport.disconnect()
        self._transition(ActorState.DISCONNECTED)

    # --- transport handlers ----------------------------------------------

    async def _on_transport_connect(self) -> None:
        if self._state.terminal:
            self._log.debug("connect event ignored after disconnect")
            return
        self._transition(ActorState.CONNECTED)
        self._log.info("connected to buoy")
        self._spawn(self.authenticate(), name=f"actor-{self._id}-authenticate")

    async def _on_transport_disconnect(self) -> None:
        self._log.info("disconnected")
        self._transition(ActorState.DISCONNECTED)

    # --- helpers ---------------------------------------------------------

    async def _call(self, method: RpcMethod, params: JsonObject | None = None) -> JsonValue:
        """Emit one ``call`` and wait for the acknowledgement attached to it."""
        call = self._calls.issue(method.value)
        payload: JsonObject = {"name": method.value}
        if params is not None:
            payload["params"] = params

        def _ack(response: JsonValue) -> None:
            self._calls.settle(call, response)

        try:
            await self._transport.emit(CALL_EVENT, payload, _ack)
        except TransportError as exc:
            # No response can arrive; the call stays pending for the stall monitor.
            self._log.warning("call %s not delivered: %s", method.value, exc)
        return await call.future

    def _chat_tick(self) -> None:
        message = f"{self._pick_decoration()} {self._rng.random()}"
        self._spawn(
            self._call(RpcMethod.SEND_CHAT, to_params(SendChatParams(message=message))),
            name=f"actor-{self._id}-send-chat",
        )

    def _pick_decoration(self) -> str:
        pool: Sequence[str] = self._decorations.entries()[:DECORATION_POOL_LIMIT]
        if not pool:
            raise LookupError("decoration pool is empty")
        return self._rng.choice(pool)

    def _spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> None:
        task = asyncio.create_task(coro, name=name)
        self._background.add(task)
        task.add_done_callback(self._on_background_done)

    def _on_background_done(self, task: asyncio.Task[Any]) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._log.error("background task %s failed", task.get_name(), exc_info=exc)

    def _transition(self, state: ActorState) -> None:
        if self._state.terminal:
            return
        # A running chat timer pins the state until end_chat or disconnect.
        if self._chat_timer is not None and state not in _CHAT_EXITS:
            self._log.debug("state %s kept while chatting", self._state.value)
            return
        if state is not self._state:
            self._log.debug("state %s -> %s", self._state.value, state.value)
        self._state = state

    async def aclose(self) -> None:
        """End chat, cancel background calls and close the transport."""
        await self.end_chat()
        for task in tuple(self._background):
            task.cancel()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        if self._transport.connected:
            await self.disconnect()
        else:
            self._transition(ActorState.DISCONNECTED)

    def __repr__(self) -> str:
        return f"ActorSession(id={self._id}, state={self._state.value})"


__all__ = ["ActorSession"]
