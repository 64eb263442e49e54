"""Binary record codec: msgpack maps <-> Pydantic models."""

from __future__ import annotations

from typing import Any, TypeVar

import msgpack
from pydantic import BaseModel

from vdbexport.errors import RecordDecodeError
from vdbexport.models import Market, Trade

M = TypeVar("M", bound=BaseModel)


def _encode(model: BaseModel) -> bytes:
    return msgpack.packb(model.model_dump(mode="json"), use_bin_type=True)


def _decode(payload: bytes, model_cls: type[M]) -> M:
    try:
        obj: Any = msgpack.unpackb(payload, raw=False)
    except (msgpack.exceptions.UnpackException, ValueError, TypeError) as e:
        raise RecordDecodeError(f"invalid msgpack payload: {e}") from e
    if not isinstance(obj, dict):
        raise RecordDecodeError(f"expected map, got {type(obj).__name__}")
    try:
        return model_cls.model_validate(obj)
    except ValueError as e:
        raise RecordDecodeError(f"invalid {model_cls.__name__} record: {e}") from e


def encode_trade(trade: Trade) -> bytes:
    return _encode(trade)


def decode_trade(payload: bytes) -> Trade:
    """Decode one stored trade. Raises RecordDecodeError on any malformed payload."""
    return _decode(payload, Trade)


def encode_market(market: Market) -> bytes:
    return _encode(market)


def decode_market(payload: bytes) -> Market:
    return _decode(payload, Market)
