"""Decoration pool backed by the ``emoji`` package."""

from __future__ import annotations

from collections.abc import Sequence

import emoji

from buoy_harness.application.ports.decorations import DecorationPoolPort


class EmojiDecorationPool(DecorationPoolPort):
    """Every emoji known to the ``emoji`` package, in its catalogue order."""

    def __init__(self) -> None:
        self._entries: tuple[str, ...] = tuple(emoji.EMOJI_DATA)

    def entries(self) -> Sequence[str]:
        return self._entries


__all__ = ["EmojiDecorationPool"]
