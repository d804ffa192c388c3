"""Type aliases for JSON-compatible payloads exchanged with the chat server."""

from __future__ import annotations

from typing import TypeAlias

JsonPrimitive: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]

__all__ = [
    "JsonPrimitive",
    "JsonValue",
    "JsonObject",
]
