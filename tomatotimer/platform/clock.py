"""Wall-clock sources for the timer engine."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float: ...


class SystemClock:
    """Epoch seconds from the OS.  Survives process restarts, unlike a
    monotonic counter, which the persisted ``start_time`` depends on."""

    def now(self) -> float:
        return time.time()


class FakeClock:
    """Manually advanced clock for tests and previews."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, value: float) -> None:
        self._now = float(value)

    def advance(self, seconds: float) -> float:
        self._now += seconds
        return self._now
