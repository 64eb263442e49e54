"""Fixed pause after every N scanned records."""

from __future__ import annotations

import time
from typing import Callable

import structlog

log = structlog.get_logger(__name__)


def pause(seconds: float) -> None:
    """Blocking sleep between batches."""
    if seconds > 0:
        time.sleep(seconds)


class BatchThrottle:
    """Counts records and pauses when the count reaches batch_size, then starts over."""

    def __init__(
        self,
        batch_size: int,
        wait_sec: float,
        sleep: Callable[[float], None] = pause,
        name: str = "trades",
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        if wait_sec < 0:
            raise ValueError("wait_sec must be >= 0")
        self.batch_size = batch_size
        self.wait_sec = wait_sec
        self._sleep = sleep
        self._name = name
        self._pos = 0
        self.pauses = 0

    def tick(self) -> bool:
        """Record one processed item. Returns True if this call paused."""
        self._pos += 1
        if self._pos < self.batch_size:
            return False
        log.info("export_sleeping", exporter=self._name, wait_sec=self.wait_sec)
        self._sleep(self.wait_sec)
        self._pos = 0
        self.pauses += 1
        return True
