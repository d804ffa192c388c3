"""Environment-driven settings for the actor harness."""

from __future__ import annotations

import logging

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CHAT_INTERVAL_SECONDS = 1.5
DEFAULT_STALL_WARNING_SECONDS = 30.0
DEFAULT_STALL_CHECK_INTERVAL_SECONDS = 5.0


class HarnessSettings(BaseSettings):
    """Chat server endpoint, invite credential and actor timing."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    buoy_url: str = Field(alias="BUOY_URL")
    invite_code: SecretStr = Field(alias="INVITE_CODE")
    socketio_path: str = Field(default="socket.io", alias="BUOY_SOCKETIO_PATH")

    chat_interval_seconds: float = Field(
        default=DEFAULT_CHAT_INTERVAL_SECONDS,
        alias="CHAT_INTERVAL_SECONDS",
        gt=0.0,
        description="Period between sendChat ticks of an actor.",
    )
    stall_warning_seconds: float = Field(
        default=DEFAULT_STALL_WARNING_SECONDS,
        alias="STALL_WARNING_SECONDS",
        gt=0.0,
        description="Age after which a pending call is reported as stalled.",
    )
    stall_check_interval_seconds: float = Field(
        default=DEFAULT_STALL_CHECK_INTERVAL_SECONDS,
        alias="STALL_CHECK_INTERVAL_SECONDS",
        gt=0.0,
    )

    @field_validator("buoy_url", mode="before")
    @classmethod
    def _normalize_buoy_url(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                raise ValueError("BUOY_URL must be a non-empty string")
            return stripped
        return value

    @property
    def invite_code_value(self) -> str:
        return self.invite_code.get_secret_value()

    @classmethod
    def load(cls) -> HarnessSettings:
        instance = cls()
        logger = logging.getLogger("buoy_harness.settings")
        logger.info("harness settings loaded: %r", instance)
        return instance


__all__ = [
    "DEFAULT_CHAT_INTERVAL_SECONDS",
    "DEFAULT_STALL_CHECK_INTERVAL_SECONDS",
    "DEFAULT_STALL_WARNING_SECONDS",
    "HarnessSettings",
]
