"""Harness-specific exceptions."""

from __future__ import annotations


class HarnessError(Exception):
    """Base class for harness failures."""


class CommandParseError(HarnessError):
    """Raised when an operator line cannot be turned into a command."""


class TransportError(HarnessError):
    """Raised when the transport is used outside its connected lifetime."""


__all__ = [
    "HarnessError",
    "CommandParseError",
    "TransportError",
]
