"""
Clock sources for reservation and timer comparisons.

The engine accepts any zero-argument callable returning seconds. Real-time
runs use ``time.monotonic``; headless runs and tests use ``ManualClock``.
"""

import time
from typing import Callable

Clock = Callable[[], float]

wall_clock: Clock = time.monotonic


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float):
        """Move the clock forward by ``seconds``."""
        if seconds < 0:
            raise ValueError("clock cannot run backwards")
        self._now += seconds

    def set(self, now: float):
        if now < self._now:
            raise ValueError("clock cannot run backwards")
        self._now = float(now)

    def __repr__(self):
        return f"ManualClock({self._now:.3f})"
