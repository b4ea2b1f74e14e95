"""Time sources for the accumulator."""

from __future__ import annotations

import threading
import time
from typing import Protocol


class Clock(Protocol):
    """Minimal interface for reading the current time."""

    def now(self) -> float:
        """Return the current time as unix seconds."""
        ...


class SystemClock:
    """Wall clock used in production."""

    def now(self) -> float:
        return time.time()


class ManualClock:
    """
    Steppable clock for tests.

    Starts at `start` (unix seconds) and only moves when told to, so
    window expiry can be exercised without sleeping.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._lock = threading.Lock()
        self._now = float(start)

    def now(self) -> float:
        with self._lock:
            return self._now

    def advance(self, seconds: float) -> float:
        """Move the clock forward and return the new time."""
        with self._lock:
            self._now += seconds
            return self._now

    def set(self, seconds: float) -> None:
        with self._lock:
            self._now = float(seconds)
