"""Shared fixtures: temporary DuckDB key-value store with trades and markets."""

from pathlib import Path

import pytest

from vdbexport.export.trades import TRADE_PREFIX
from vdbexport.models import Aggressor, Market, Trade
from vdbexport.storage.db import get_connection, init_schema
from vdbexport.storage.kv import put_records
from vdbexport.storage.markets import MARKET_PREFIX, put_markets
from vdbexport.storage.trades import put_trades


def _trade(n: int, **kwargs) -> Trade:
    fields = {
        "id": f"t{n}",
        "market_id": "m1",
        "seller": f"seller{n}",
        "buyer": f"buyer{n}",
        "size": 10 * n,
        "price": 1000 * n,
        "aggressor": Aggressor.BUY,
        "buy_order": f"bo{n}",
        "sell_order": f"so{n}",
        "timestamp": 1_600_000_000_000_000_000 + n * 1_000_000_000,
    }
    fields.update(kwargs)
    return Trade(**fields)


def build_store(path: Path, trades=(), markets=(), raw=()) -> Path:
    """Create a store file. raw is a list of (key, value) written verbatim."""
    conn = get_connection(path)
    init_schema(conn)
    try:
        put_trades(conn, TRADE_PREFIX, list(trades))
        put_markets(conn, MARKET_PREFIX, list(markets))
        put_records(conn, list(raw))
    finally:
        conn.close()
    return path


@pytest.fixture
def store_factory(tmp_path):
    def _make(trades=(), markets=(), raw=()):
        return build_store(tmp_path / "store.duckdb", trades, markets, raw)

    return _make


@pytest.fixture
def make_trade():
    """Factory for numbered trades: party, price and timestamp all derive from n."""
    return _trade


@pytest.fixture
def market_dp2():
    return Market(id="m1", name="BTC/USD", decimal_places=2)
