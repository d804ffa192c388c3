"""Operator input read line by line from a text stream."""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from collections.abc import AsyncIterator
from typing import TextIO

logger = logging.getLogger("buoy_harness.console")


class StreamLineSource:
    """Async iterator over the lines of a blocking text stream.

    A daemon thread does the blocking reads so chat timers keep firing while
    the operator types, and a pending read never holds up interpreter exit.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdin

    def __aiter__(self) -> AsyncIterator[str]:
        return self._lines()

    async def _lines(self) -> AsyncIterator[str]:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[str | None] = asyncio.Queue()
        reader = threading.Thread(
            target=self._pump,
            args=(loop, queue),
            name="harness-console-reader",
            daemon=True,
        )
        reader.start()
        while True:
            line = await queue.get()
            if line is None:
                return
            yield line

    def _pump(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[str | None]) -> None:
        try:
            for raw in iter(self._stream.readline, ""):
                loop.call_soon_threadsafe(queue.put_nowait, raw.rstrip("\r\n"))
            loop.call_soon_threadsafe(queue.put_nowait, None)
        except RuntimeError:
            # Event loop already closed; nobody is left to read the line.
            logger.debug("console reader stopped after loop shutdown")


__all__ = ["StreamLineSource"]
