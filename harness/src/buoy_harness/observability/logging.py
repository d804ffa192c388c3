"""Logging helpers (formatter, actor tagging and dictConfig builder)."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, MutableMapping
from logging.config import dictConfig
from typing import Any


def _level(env_var: str, default: str) -> str:
    return os.getenv(env_var, default).upper()


class ExtrasFormatter(logging.Formatter):
    """Prefix actor-tagged records and append structured `data` payloads."""

    def format(self, record: logging.LogRecord) -> str:
        record_dict = record.__dict__
        actor = record_dict.get("actor")
        record_data = record_dict.get("data")

        formatted = super().format(record)
        if actor is not None:
            head, sep, message = formatted.partition(": ")
            formatted = f"{head}{sep}[{actor}] {message}" if sep else f"[{actor}] {formatted}"
        if record_data:
            try:
                encoded = json.dumps(record_data, sort_keys=True, separators=(",", ":"))
            except TypeError:
                encoded = str(record_data)
            return f"{formatted} | data={encoded}"
        return formatted


class ActorLogger(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Attach the owning actor's identity to every record."""

    def __init__(self, logger: logging.Logger, actor_id: int) -> None:
        super().__init__(logger, {"actor": actor_id})
        self._actor_id = actor_id

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("actor", self._actor_id)
        kwargs["extra"] = extra
        return msg, kwargs


def build_log_config(
    *,
    root_level_env: str = "LOG_LEVEL",
    root_default: str = "INFO",
    extra_loggers: Mapping[str, dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Return a dictConfig-compatible logging configuration."""

    loggers: dict[str, dict[str, Any]] = {
        "socketio": {
            "level": _level("SOCKETIO_LOG_LEVEL", "WARNING"),
            "handlers": ["console"],
            "propagate": False,
        },
        "socketio.client": {
            "level": _level("SOCKETIO_LOG_LEVEL", "WARNING"),
            "handlers": ["console"],
            "propagate": False,
        },
        "engineio": {
            "level": _level("SOCKETIO_LOG_LEVEL", "WARNING"),
            "handlers": ["console"],
            "propagate": False,
        },
        "engineio.client": {
            "level": _level("SOCKETIO_LOG_LEVEL", "WARNING"),
            "handlers": ["console"],
            "propagate": False,
        },
    }
    if extra_loggers:
        loggers.update(extra_loggers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "()": ExtrasFormatter,
                "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {
            "level": _level(root_level_env, root_default),
            "handlers": ["console"],
        },
        "loggers": loggers,
    }


def configure_logging(
    *,
    root_level_env: str = "LOG_LEVEL",
    root_default: str = "INFO",
    extra_loggers: Mapping[str, dict[str, Any]] | None = None,
) -> None:
    """Apply the harness logging config."""
    config = build_log_config(
        root_level_env=root_level_env,
        root_default=root_default,
        extra_loggers=extra_loggers,
    )
    dictConfig(config)
    logging.getLogger("buoy_harness.observability.logging").debug(
        "configured logging",
        extra={"data": {"root_level": config["root"]["level"]}},
    )


__all__ = ["ActorLogger", "ExtrasFormatter", "build_log_config", "configure_logging"]
