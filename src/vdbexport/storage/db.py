"""DuckDB connection and key-value schema init."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import duckdb

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

# Ordered key-value table; keys compare bytewise.
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key     BLOB NOT NULL,
    value   BLOB NOT NULL
);
"""


def get_connection(db_path: str | Path, read_only: bool = False) -> DuckDBPyConnection:
    """Return a DuckDB connection. Caller must close or use as context manager.
    Exporters always open with read_only=True so several of them can share one store."""
    path = Path(db_path)
    if not read_only:
        path.parent.mkdir(parents=True, exist_ok=True)
    return duckdb.connect(str(path), read_only=read_only)


def init_schema(conn: DuckDBPyConnection) -> None:
    """Create the kv table if it does not exist."""
    for stmt in SCHEMA_SQL.split(";"):
        stmt = stmt.strip()
        if stmt:
            try:
                conn.execute(stmt)
            except duckdb.Error as e:
                if "already exists" not in str(e).lower():
                    raise


def has_schema(conn: DuckDBPyConnection) -> bool:
    """True if the database holds the kv table."""
    row = conn.execute(
        "SELECT COUNT(*) FROM information_schema.tables WHERE table_name = 'kv'"
    ).fetchone()
    return bool(row and row[0])
