"""Wire models for the ``call`` event exchanged with the chat server."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import JsonValue as PydanticJsonValue

from buoy_harness.json_types import JsonObject, JsonValue

RoomId = str | int
PeerId = str | int


class JoinParams(BaseModel):
    """Parameters of ``join``; the invite credential travels as ``jwt``."""

    model_config = ConfigDict(frozen=True)

    credential: str = Field(serialization_alias="jwt")


class JoinRoomParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: RoomId


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    decoration: str = Field(serialization_alias="emoji")
    handle: str


class SetProfileParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    profile: Profile


class SendChatParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


def to_params(model: BaseModel) -> JsonObject:
    """Dump a params model using its wire field names."""
    return model.model_dump(mode="json", by_alias=True)


class ErrorFlaggedResponse(BaseModel):
    """Response whose ``error`` field, when truthy, marks an application failure."""

    model_config = ConfigDict(extra="allow", frozen=True)

    error: PydanticJsonValue = None

    @property
    def failed(self) -> bool:
        # Empty objects and arrays are truthy on the wire.
        if isinstance(self.error, (dict, list)):
            return True
        return bool(self.error)

    @classmethod
    def from_payload(cls, payload: JsonValue) -> Self:
        """Validate an acknowledgement payload; an empty ack counts as ``{}``."""
        return cls.model_validate({} if payload is None else payload)


class JoinResponse(ErrorFlaggedResponse):
    peer_id: PeerId | None = Field(default=None, alias="peerId")


class JoinRoomResponse(ErrorFlaggedResponse):
    message: PydanticJsonValue = None


class Room(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: RoomId


_ROOM_LIST = TypeAdapter(list[Room])


def parse_rooms(payload: JsonValue) -> tuple[Room, ...]:
    """Validate a ``fetchRooms`` acknowledgement, preserving server order."""
    return tuple(_ROOM_LIST.validate_python(payload))


__all__ = [
    "ErrorFlaggedResponse",
    "JoinParams",
    "JoinResponse",
    "JoinRoomParams",
    "JoinRoomResponse",
    "PeerId",
    "Profile",
    "Room",
    "RoomId",
    "SendChatParams",
    "SetProfileParams",
    "parse_rooms",
    "to_params",
]
