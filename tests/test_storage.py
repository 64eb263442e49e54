"""Key-value store: prefix bounds, ordering, snapshot scan."""

from contextlib import closing

import msgpack

from vdbexport.export.trades import TRADE_PREFIX
from vdbexport.storage.db import get_connection, has_schema
from vdbexport.storage.kv import count_prefix, iter_prefix, prefix_upper_bound, put_records, store_stats
from vdbexport.storage.markets import MARKET_PREFIX, load_markets
from vdbexport.storage.trades import trade_key


def test_prefix_upper_bound():
    assert prefix_upper_bound(b"T:") == b"T;"
    assert prefix_upper_bound(b"a\xff") == b"b"
    assert prefix_upper_bound(b"\xff\xff") is None
    assert prefix_upper_bound(b"") is None


def test_iter_prefix_is_bytewise_ordered_and_scoped(store_factory):
    raw = [
        (b"T:b", b"2"),
        (b"T:a", b"1"),
        (b"T:\xff", b"3"),
        (b"T;", b"outside"),
        (b"S:z", b"outside"),
    ]
    path = store_factory(raw=raw)
    conn = get_connection(path, read_only=True)
    try:
        assert list(iter_prefix(conn, b"T:", fetch_size=2)) == [
            (b"T:a", b"1"),
            (b"T:b", b"2"),
            (b"T:\xff", b"3"),
        ]
        assert count_prefix(conn, b"T:") == 3
    finally:
        conn.close()


def test_put_records_replaces_value(store_factory):
    path = store_factory(raw=[(b"k", b"old")])
    conn = get_connection(path)
    try:
        put_records(conn, [(b"k", b"new")])
        assert list(iter_prefix(conn, b"k")) == [(b"k", b"new")]
    finally:
        conn.close()


def test_trade_keys_follow_timestamp_order(make_trade):
    early = make_trade(1, timestamp=9)
    late = make_trade(2, timestamp=10)
    assert trade_key(TRADE_PREFIX, early) < trade_key(TRADE_PREFIX, late)


def test_closed_scan_releases_transaction(store_factory):
    path = store_factory(raw=[(b"T:a", b"1"), (b"T:b", b"2")])
    conn = get_connection(path, read_only=True)
    try:
        with closing(iter_prefix(conn, b"T:")) as records:
            next(records)
        # A fresh scan must be able to start its own transaction
        assert len(list(iter_prefix(conn, b"T:"))) == 2
    finally:
        conn.close()


def test_store_stats_and_markets(store_factory, market_dp2, make_trade):
    path = store_factory(trades=[make_trade(1), make_trade(2)], markets=[market_dp2])
    conn = get_connection(path, read_only=True)
    try:
        assert has_schema(conn)
        stats = store_stats(conn, {"trades": TRADE_PREFIX, "markets": MARKET_PREFIX})
        assert stats == {"total_keys": 3, "trades": 2, "markets": 1}
        assert load_markets(conn, MARKET_PREFIX) == {"m1": market_dp2}
    finally:
        conn.close()


def test_market_with_negative_decimal_places_loads(store_factory):
    path = store_factory(raw=[(MARKET_PREFIX + b"m1", msgpack.packb({"id": "m1", "decimal_places": -2}))])
    conn = get_connection(path, read_only=True)
    try:
        assert load_markets(conn, MARKET_PREFIX)["m1"].decimal_places == -2
    finally:
        conn.close()
