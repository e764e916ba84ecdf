"""Injectable time source for event timestamps and run timings."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now_iso(self) -> str: ...

    def monotonic(self) -> float: ...


class SystemClock:
    """Default implementation: UTC wall clock, ``time.monotonic`` for durations."""

    def now_iso(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def monotonic(self) -> float:
        return time.monotonic()
