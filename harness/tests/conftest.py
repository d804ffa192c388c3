from __future__ import annotations

import pytest


@pytest.fixture
def anyio_backend() -> str:
    # Harness tests run on asyncio only; the sessions rely on asyncio tasks.
    return "asyncio"
