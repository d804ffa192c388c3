"""Port describing the pool of display decorations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class DecorationPoolPort(Protocol):
    """Ordered, read-only pool of display glyphs."""

    def entries(self) -> Sequence[str]:
        """Return the pool in its stable order."""


__all__ = ["DecorationPoolPort"]
