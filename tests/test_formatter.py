"""Row formatting: decimal scaling, timestamps, column order."""

from decimal import Decimal

import pytest

from vdbexport.export.formatter import (
    TRADE_HEADER,
    bool_to_flag,
    format_price_by_dp,
    format_timestamp,
    trade_to_csv_row,
)
from vdbexport.models import Aggressor


@pytest.mark.parametrize(
    "price,dp,expected",
    [
        (123000, 3, "123.000"),
        (2000, 2, "20.00"),
        (5, 2, "0.05"),
        (0, 3, "0.000"),
        (123, 0, "123"),
        (10**30 + 1, 4, "100000000000000000000000000.0001"),
    ],
)
def test_format_price_by_dp(price, dp, expected):
    assert format_price_by_dp(price, dp) == expected


@pytest.mark.parametrize("price,dp", [(1, 1), (987654321, 6), (42, 9)])
def test_scaled_price_equals_raw_over_power_of_ten(price, dp):
    assert Decimal(format_price_by_dp(price, dp)) == Decimal(price) / (Decimal(10) ** dp)


def test_format_timestamp_from_nanoseconds():
    assert format_timestamp(1_600_000_000_123_456_789) == "2020-09-13 12:26:40"
    assert format_timestamp(0, "%Y-%m-%dT%H:%M:%S.%f") == "1970-01-01T00:00:00.000000"


def test_row_matches_header_order(make_trade):
    trade = make_trade(3, aggressor=Aggressor.SELL, timestamp=1_600_000_000_000_000_000)
    row = trade_to_csv_row(trade, 2, True, "chain-1")
    assert len(row) == len(TRADE_HEADER) == 13
    record = dict(zip(TRADE_HEADER, row))
    assert record == {
        "ChainID": "chain-1",
        "ID": "t3",
        "MarketID": "m1",
        "Seller": "seller3",
        "Buyer": "buyer3",
        "Size": "30",
        "Price": "30.00",
        "TickPrice": "3000",
        "Aggressor": "Sell",
        "BuyOrder": "bo3",
        "SellOrder": "so3",
        "Timestamp": "2020-09-13 12:26:40",
        "IsBot": "1",
    }


def test_zero_dp_price_equals_tick_price(make_trade):
    row = trade_to_csv_row(make_trade(1, aggressor=Aggressor.UNSPECIFIED), 0, False, "c")
    assert row[6] == row[7] == "1000"
    assert row[8] == "Unknown"
    assert row[12] == bool_to_flag(False) == "0"


def test_format_timestamp_int64_bounds():
    assert format_timestamp(2**63 - 1) == "2262-04-11 23:47:16"
    assert format_timestamp(-(2**63)) == "1677-09-21 00:12:43"
