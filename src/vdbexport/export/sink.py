"""CSV output file: header once, rows streamed, flushed on close."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence

from vdbexport.errors import OutputCreateError


class CsvSink:
    """Owns one destination file. Use as a context manager so close() always flushes."""

    def __init__(self, path: str | Path, header: Sequence[str]) -> None:
        self.path = Path(path)
        self.rows_written = 0
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "w", encoding="utf-8", newline="")
        except OSError as e:
            raise OutputCreateError(f"cannot create {self.path}: {e}") from e
        self._writer = csv.writer(self._file, lineterminator="\n")
        try:
            self._writer.writerow(header)
        except OSError as e:
            self._file.close()
            raise OutputCreateError(f"cannot write header to {self.path}: {e}") from e

    def write_row(self, row: Sequence[str]) -> None:
        self._writer.writerow(row)
        self.rows_written += 1

    def flush(self) -> None:
        self._file.flush()

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self.flush()
        finally:
            self._file.close()

    def __enter__(self) -> CsvSink:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
