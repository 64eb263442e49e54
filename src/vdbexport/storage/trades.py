"""Trade record writers. Loader tooling for filling a store (the exporter only reads)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vdbexport.codec import encode_trade
from vdbexport.models import Trade
from vdbexport.storage.kv import put_records

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection


def trade_key(prefix: bytes, trade: Trade) -> bytes:
    """Key = prefix + zero-padded timestamp + trade ID, so key order follows time."""
    return prefix + f"{trade.timestamp:020d}:{trade.id}".encode()


def put_trades(conn: DuckDBPyConnection, prefix: bytes, trades: list[Trade]) -> None:
    put_records(conn, [(trade_key(prefix, t), encode_trade(t)) for t in trades])
