"""Background eviction of buckets that have left the rolling window."""

from __future__ import annotations

import threading

import structlog

from rollsum.services.accumulator import Accumulator

logger = structlog.get_logger(__name__)


class BucketSweeper:
    """
    Periodically calls `Accumulator.evict_expired` on a daemon thread.

    Opt-in: the service only starts one when ROLLSUM_SWEEP_INTERVAL_S > 0.
    """

    def __init__(self, accumulator: Accumulator, interval_s: float) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self.accumulator = accumulator
        self.interval_s = interval_s
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> int:
        removed = self.accumulator.evict_expired()
        if removed:
            logger.info("buckets_evicted", removed=removed)
        return removed

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="rollsum-sweeper", daemon=True)
        self._thread.start()
        logger.info("sweeper_started", interval_s=self.interval_s)

    def stop(self, timeout: float | None = 5.0) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout)
        self._thread = None
        logger.info("sweeper_stopped")

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_s):
            self.run_once()
