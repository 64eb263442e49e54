"""Ordered key-value access: put, prefix scan, counts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection


def prefix_upper_bound(prefix: bytes) -> bytes | None:
    """Smallest key greater than every key starting with prefix. None if unbounded."""
    b = bytearray(prefix)
    while b:
        if b[-1] < 0xFF:
            b[-1] += 1
            return bytes(b)
        b.pop()
    return None


def _prefix_where(prefix: bytes) -> tuple[str, list[bytes]]:
    upper = prefix_upper_bound(prefix)
    if upper is None:
        return "key >= ?", [prefix]
    return "key >= ? AND key < ?", [prefix, upper]


def put_records(conn: DuckDBPyConnection, records: Iterable[tuple[bytes, bytes]]) -> None:
    """Set value for each key, replacing any existing value. Loaders and tests only."""
    for key, value in records:
        conn.execute("DELETE FROM kv WHERE key = ?", [key])
        conn.execute("INSERT INTO kv (key, value) VALUES (?, ?)", [key, value])


def iter_prefix(
    conn: DuckDBPyConnection,
    prefix: bytes,
    fetch_size: int = 1000,
) -> Iterator[tuple[bytes, bytes]]:
    """
    Yield (key, value) for every key starting with prefix, in ascending bytewise order.
    Runs inside one transaction so the scan sees the store as of its start.
    """
    where, params = _prefix_where(prefix)
    conn.begin()
    try:
        cur = conn.execute(f"SELECT key, value FROM kv WHERE {where} ORDER BY key ASC", params)
        while True:
            rows = cur.fetchmany(fetch_size)
            if not rows:
                break
            for key, value in rows:
                yield bytes(key), bytes(value)
    finally:
        conn.rollback()


def count_prefix(conn: DuckDBPyConnection, prefix: bytes) -> int:
    where, params = _prefix_where(prefix)
    return conn.execute(f"SELECT COUNT(*) FROM kv WHERE {where}", params).fetchone()[0]


def store_stats(conn: DuckDBPyConnection, prefixes: dict[str, bytes]) -> dict[str, int]:
    """Return total key count plus count per named prefix."""
    stats = {"total_keys": conn.execute("SELECT COUNT(*) FROM kv").fetchone()[0]}
    for name, prefix in prefixes.items():
        stats[name] = count_prefix(conn, prefix)
    return stats
