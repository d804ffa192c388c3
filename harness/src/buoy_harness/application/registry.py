"""Fixed-size, ordered collection of actor sessions."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterator, Sequence

from buoy_harness.application.session import ActorSession

SessionFactory = Callable[[int], ActorSession]

logger = logging.getLogger("buoy_harness.registry")


class ActorRegistry:
    """Actors indexed by identity; membership never changes after construction."""

    def __init__(self, sessions: Sequence[ActorSession]) -> None:
        if not sessions:
            raise ValueError("registry requires at least one actor")
        for index, session in enumerate(sessions):
            if session.id != index:
                raise ValueError(f"actor at position {index} has id {session.id}")
        self._sessions: tuple[ActorSession, ...] = tuple(sessions)

    @classmethod
    def spawn(cls, count: int, factory: SessionFactory) -> ActorRegistry:
        """Create ``count`` actors with identities ``0..count-1``."""
        if count < 1:
            raise ValueError("actor count must be positive")
        return cls([factory(index) for index in range(count)])

    def get(self, index: int) -> ActorSession | None:
        if 0 <= index < len(self._sessions):
            return self._sessions[index]
        return None

    def __iter__(self) -> Iterator[ActorSession]:
        return iter(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    async def connect_all(self) -> None:
        """Connect every actor concurrently."""
        logger.info("connecting actors", extra={"data": {"count": len(self._sessions)}})
        await asyncio.gather(*(session.connect() for session in self._sessions))

    async def aclose(self) -> None:
        """Stop chat timers and close every transport."""
        results = await asyncio.gather(
            *(session.aclose() for session in self._sessions),
            return_exceptions=True,
        )
        for session, result in zip(self._sessions, results, strict=True):
            if isinstance(result, BaseException):
                logger.error(
                    "actor shutdown failed",
                    extra={"actor": session.id},
                    exc_info=result,
                )


__all__ = ["ActorRegistry", "SessionFactory"]
