"""Record schema (Pydantic) - Trade, Market."""

from vdbexport.models.market import Market
from vdbexport.models.trade import Aggressor, Trade

__all__ = [
    "Aggressor",
    "Market",
    "Trade",
]
