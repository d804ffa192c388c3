"""Operator command grammar."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from buoy_harness.errors import CommandParseError


class ActorCommand(str, Enum):
    """Commands understood by a single actor."""

    JOIN_ROOM = "joinRoom"
    BEGIN_CHAT = "beginChat"
    END_CHAT = "endChat"


BROADCAST_COMMANDS: frozenset[ActorCommand] = frozenset({ActorCommand.JOIN_ROOM})


@dataclass(frozen=True, slots=True)
class Command:
    """One parsed operator line.

    ``target`` is the actor index for directed commands and ``None`` for
    broadcasts. ``name`` is the raw command token, kept verbatim so unknown
    commands can be reported back to the operator.
    """

    target: int | None
    name: str | None

    @property
    def broadcast(self) -> bool:
        return self.target is None

    def resolve(self) -> ActorCommand | None:
        """Return the known command for ``name`` or ``None``."""
        if self.name is None:
            return None
        try:
            return ActorCommand(self.name)
        except ValueError:
            return None


def parse_command(line: str) -> Command:
    """Split an operator line into a directed or broadcast command.

    A leading token made only of ASCII digits is an actor index; everything
    after the command token is ignored.
    """
    tokens = line.split()
    if not tokens:
        raise CommandParseError("empty command line")

    head = tokens[0]
    if head.isascii() and head.isdigit():
        return Command(target=int(head), name=tokens[1] if len(tokens) > 1 else None)
    return Command(target=None, name=head)


__all__ = ["ActorCommand", "BROADCAST_COMMANDS", "Command", "parse_command"]
