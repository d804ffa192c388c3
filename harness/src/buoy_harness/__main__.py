from __future__ import annotations

from buoy_harness.runtime.cli import main

main()
