"""Trade - decoded on-chain trade record."""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class Aggressor(IntEnum):
    """Side whose order triggered the trade."""

    UNSPECIFIED = 0
    BUY = 1
    SELL = 2

    @property
    def label(self) -> str:
        return _AGGRESSOR_LABELS[self]


_AGGRESSOR_LABELS = {
    Aggressor.UNSPECIFIED: "Unknown",
    Aggressor.BUY: "Buy",
    Aggressor.SELL: "Sell",
}


class Trade(BaseModel):
    """Executed trade between two parties on one market. Price is raw (unscaled)."""

    model_config = ConfigDict(frozen=True)

    id: str
    market_id: str
    seller: str
    buyer: str
    size: int = Field(..., ge=0)
    price: int = Field(..., ge=0)
    aggressor: Aggressor = Aggressor.UNSPECIFIED
    buy_order: str = ""
    sell_order: str = ""
    timestamp: int = Field(0, ge=-(2**63), le=2**63 - 1)  # ns epoch, int64
