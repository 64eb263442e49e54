"""Trade -> CSV row projection."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from vdbexport.models import Trade

TRADE_HEADER = [
    "ChainID",
    "ID",
    "MarketID",
    "Seller",
    "Buyer",
    "Size",
    "Price",  # DP corrected price
    "TickPrice",  # raw price from the record
    "Aggressor",
    "BuyOrder",
    "SellOrder",
    "Timestamp",
    "IsBot",
]

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_price_by_dp(price: int, decimal_places: int) -> str:
    """Scale an integer price by 10^-dp without going through floats: (123000, 3) -> '123.000'."""
    digits = str(price)
    if decimal_places <= 0:
        return digits
    digits = digits.rjust(decimal_places + 1, "0")
    return f"{digits[:-decimal_places]}.{digits[-decimal_places:]}"


def format_timestamp(ts_ns: int, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Nanosecond epoch -> UTC calendar string."""
    return (_EPOCH + timedelta(microseconds=ts_ns // 1000)).strftime(fmt)


def bool_to_flag(value: bool) -> str:
    return "1" if value else "0"


def trade_to_csv_row(
    trade: Trade,
    decimal_places: int,
    is_bot: bool,
    chain_id: str,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> list[str]:
    return [
        chain_id,
        trade.id,
        trade.market_id,
        trade.seller,
        trade.buyer,
        str(trade.size),
        format_price_by_dp(trade.price, decimal_places),
        str(trade.price),
        trade.aggressor.label,
        trade.buy_order,
        trade.sell_order,
        format_timestamp(trade.timestamp, timestamp_format),
        bool_to_flag(is_bot),
    ]
