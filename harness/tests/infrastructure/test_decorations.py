from __future__ import annotations

from buoy_harness.domain.actor import DECORATION_POOL_LIMIT
from buoy_harness.infrastructure.decorations import EmojiDecorationPool


def test_pool_has_enough_stable_entries() -> None:
    first = EmojiDecorationPool().entries()
    second = EmojiDecorationPool().entries()

    assert len(first) > DECORATION_POOL_LIMIT
    assert list(first[:DECORATION_POOL_LIMIT]) == list(second[:DECORATION_POOL_LIMIT])
    assert all(isinstance(entry, str) and entry for entry in first)
