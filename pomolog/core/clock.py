from __future__ import annotations

import time
from typing import Protocol


MS_PER_SECOND = 1000


class Clock(Protocol):
    def now(self) -> int:
        """Current wall-clock time in milliseconds since the epoch."""


class SystemClock:
    """Wall-clock source backed by `time.time()`."""

    def now(self) -> int:
        return int(time.time() * MS_PER_SECOND)


def elapsed_whole_seconds(started_at_ms: int, now_ms: int) -> int:
    return max(0, (now_ms - started_at_ms) // MS_PER_SECOND)
