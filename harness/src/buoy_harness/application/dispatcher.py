"""Serial command loop driving actors from operator input."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable
from enum import Enum

from buoy_harness.application.registry import ActorRegistry
from buoy_harness.application.session import ActorSession
from buoy_harness.domain.command import BROADCAST_COMMANDS, ActorCommand, Command, parse_command
from buoy_harness.errors import CommandParseError

logger = logging.getLogger("buoy_harness.dispatcher")


class DispatchOutcome(str, Enum):
    """Whether the command loop accepts further input."""

    CONTINUE = "continue"
    HALT = "halt"


class CommandDispatcher:
    """Applies one operator line at a time to the actor registry.

    Each line is fully processed, including every multi-step actor operation
    it triggers, before the next line is read. A failed ``joinRoom`` halts
    the loop for good.
    """

    def __init__(self, registry: ActorRegistry) -> None:
        self._registry = registry

    async def run(self, lines: AsyncIterable[str]) -> DispatchOutcome:
        """Dispatch lines until the source ends or a command halts the loop."""
        async for line in lines:
            outcome = await self.dispatch(line)
            if outcome is DispatchOutcome.HALT:
                logger.warning("command loop halted", extra={"data": {"line": line}})
                return outcome
        logger.info("input closed")
        return DispatchOutcome.CONTINUE

    async def dispatch(self, line: str) -> DispatchOutcome:
        try:
            command = parse_command(line)
        except CommandParseError:
            return DispatchOutcome.CONTINUE

        if command.target is None:
            return await self._dispatch_broadcast(command)
        return await self._dispatch_directed(command.target, command)

    async def _dispatch_directed(self, target: int, command: Command) -> DispatchOutcome:
        session = self._registry.get(target)
        if session is None:
            logger.warning("could not find actor with id %s", target)
            return DispatchOutcome.CONTINUE

        action = command.resolve()
        if action is None:
            logger.warning("invalid actor specific command %s", command.name, extra={"actor": session.id})
            return DispatchOutcome.CONTINUE
        return await self._apply(session, action)

    async def _dispatch_broadcast(self, command: Command) -> DispatchOutcome:
        action = command.resolve()
        if action is None or action not in BROADCAST_COMMANDS:
            logger.warning("invalid command %s", command.name)
            return DispatchOutcome.CONTINUE

        for session in self._registry:
            outcome = await self._apply(session, action)
            if outcome is DispatchOutcome.HALT:
                return outcome
        return DispatchOutcome.CONTINUE

    async def _apply(self, session: ActorSession, action: ActorCommand) -> DispatchOutcome:
        if action is ActorCommand.JOIN_ROOM:
            if not await session.join_room():
                return DispatchOutcome.HALT
            await session.set_profile()
        elif action is ActorCommand.BEGIN_CHAT:
            await session.begin_chat()
        elif action is ActorCommand.END_CHAT:
            await session.end_chat()
        return DispatchOutcome.CONTINUE


__all__ = ["CommandDispatcher", "DispatchOutcome"]
