"""Actor lifecycle states and the RPC vocabulary spoken to the chat server."""

from __future__ import annotations

from enum import Enum

CALL_EVENT = "call"

DECORATION_POOL_LIMIT = 20


class ActorState(str, Enum):
    """Lifecycle states of a simulated actor."""

    CREATED = "created"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    ROOM_JOINED = "room_joined"
    CHATTING = "chatting"
    IDLE = "idle"
    DISCONNECTED = "disconnected"

    @property
    def terminal(self) -> bool:
        return self is ActorState.DISCONNECTED


class RpcMethod(str, Enum):
    """Method names carried in the ``call`` event payload."""

    JOIN = "join"
    FETCH_ROOMS = "fetchRooms"
    JOIN_ROOM = "joinRoom"
    SET_PROFILE = "setProfile"
    SEND_CHAT = "sendChat"


def actor_handle(actor_id: int) -> str:
    """Return the display handle advertised by an actor."""
    return f"Actor {actor_id}"


__all__ = [
    "CALL_EVENT",
    "DECORATION_POOL_LIMIT",
    "ActorState",
    "RpcMethod",
    "actor_handle",
]
