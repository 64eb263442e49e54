"""Market metadata records in the store.

load_markets is used by the CLI to pre-load the snapshot; put_markets is loader tooling.
"""

from __future__ import annotations

from contextlib import closing
from typing import TYPE_CHECKING

from vdbexport.codec import decode_market, encode_market
from vdbexport.models import Market
from vdbexport.storage.kv import iter_prefix, put_records

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

MARKET_PREFIX = b"MKT:"


def market_key(prefix: bytes, market_id: str) -> bytes:
    return prefix + market_id.encode()


def put_markets(conn: DuckDBPyConnection, prefix: bytes, markets: list[Market]) -> None:
    """Write market records under prefix."""
    put_records(conn, [(market_key(prefix, m.id), encode_market(m)) for m in markets])


def load_markets(conn: DuckDBPyConnection, prefix: bytes) -> dict[str, Market]:
    """Decode all market records into {market_id: Market}. Raises RecordDecodeError on bad data."""
    markets: dict[str, Market] = {}
    with closing(iter_prefix(conn, prefix)) as records:
        for _, value in records:
            market = decode_market(value)
            markets[market.id] = market
    return markets
