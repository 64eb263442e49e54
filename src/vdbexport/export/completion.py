"""Completion signal an orchestrator waits on (wait-group style)."""

from __future__ import annotations

from threading import Condition


class CompletionSignal:
    """Countdown of running exporters. Each exporter calls done() exactly once."""

    def __init__(self, count: int = 0) -> None:
        if count < 0:
            raise ValueError("count must be >= 0")
        self._pending = count
        self._cond = Condition()

    def add(self, n: int = 1) -> None:
        with self._cond:
            if self._pending + n < 0:
                raise ValueError("negative completion counter")
            self._pending += n
            if self._pending == 0:
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every exporter has signalled. False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout=timeout)

    @property
    def pending(self) -> int:
        with self._cond:
            return self._pending
