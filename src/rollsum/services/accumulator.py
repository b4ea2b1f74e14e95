"""
Time-bucketed counter storage.

Values are stored in per-minute buckets, each a map of key -> running
total. The rolling hourly sum for a key adds up the 60 buckets ending
at the bucket that contains "now".

Buckets are never dropped by record/sum, so memory grows by one bucket
per minute observed. `evict_expired` removes buckets that have left the
window; it only runs when something calls it (see services/sweeper.py).
"""

from __future__ import annotations

import threading

from rollsum.services.clock import Clock, SystemClock

BUCKET_SECONDS = 60
WINDOW_BUCKETS = 60

_INT64_MIN = -(2**63)
_INT64_SPAN = 2**64


def bucket_index(seconds: float) -> int:
    """Return the minute bucket containing `seconds` (unix time)."""
    return int(seconds // BUCKET_SECONDS)


def wrap_int64(value: int) -> int:
    """Fold an int into the signed 64-bit range (two's complement)."""
    return (value - _INT64_MIN) % _INT64_SPAN + _INT64_MIN


class Accumulator:
    """Thread-safe, minute-bucketed counters with a trailing one-hour sum."""

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock: Clock = clock or SystemClock()
        self._lock = threading.Lock()
        self._buckets: dict[int, dict[str, int]] = {}

    def record(self, key: str, delta: int) -> int:
        """
        Add `delta` to `key` in the current minute bucket.

        Returns the key's total within the current bucket only, not the
        hourly sum.
        """
        with self._lock:
            b = bucket_index(self.clock.now())
            bucket = self._buckets.get(b)
            if bucket is None:
                bucket = {}
                self._buckets[b] = bucket
            total = wrap_int64(bucket.get(key, 0) + delta)
            bucket[key] = total
            return total

    def sum(self, key: str) -> int:
        """Sum `key` over the current bucket and the 59 before it."""
        with self._lock:
            b = bucket_index(self.clock.now())
            total = 0
            for offset in range(WINDOW_BUCKETS):
                bucket = self._buckets.get(b - offset)
                if bucket is not None:
                    total += bucket.get(key, 0)
            return wrap_int64(total)

    def bucket_count(self) -> int:
        with self._lock:
            return len(self._buckets)

    def evict_expired(self) -> int:
        """Drop buckets older than the trailing window; return how many."""
        with self._lock:
            oldest = bucket_index(self.clock.now()) - (WINDOW_BUCKETS - 1)
            stale = [b for b in self._buckets if b < oldest]
            for b in stale:
                del self._buckets[b]
            return len(stale)
