"""Run counters shared between an exporter and its caller."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock


class AtomicCounter:
    """Integer counter safe to increment from several exporter threads."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = Lock()

    def inc(self, n: int = 1) -> int:
        with self._lock:
            self._value += n
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"AtomicCounter({self.value})"


@dataclass
class ExportStats:
    """Totals reported after a run."""

    total_trades: AtomicCounter = field(default_factory=AtomicCounter)
    excluded_trades: AtomicCounter = field(default_factory=AtomicCounter)

    def as_dict(self) -> dict[str, int]:
        return {
            "total_trades": self.total_trades.value,
            "excluded_trades": self.excluded_trades.value,
        }


@dataclass
class ExportResult:
    """Outcome of one exporter instance."""

    output_path: str
    rows_written: int = 0
    error: str | None = None  # set when the scan stopped early

    @property
    def completed(self) -> bool:
        return self.error is None
