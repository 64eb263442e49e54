"""Decimal-place lookup over a pre-loaded market snapshot."""

from __future__ import annotations

from typing import Mapping

import structlog

from vdbexport.models import Market

log = structlog.get_logger(__name__)


class MarketLookup:
    """Read-only view of market metadata for one run."""

    def __init__(self, markets: Mapping[str, Market]) -> None:
        self._decimal_places = {mid: m.decimal_places for mid, m in markets.items()}
        self.missing_hits = 0

    def decimal_places(self, market_id: str) -> int:
        """Configured decimal places, or 0 for unknown markets and negative settings (logged every time)."""
        dp = self._decimal_places.get(market_id)
        if dp is None:
            self.missing_hits += 1
            log.warning("market_not_found", market_id=market_id, default_dp=0)
            return 0
        if dp < 0:
            log.warning("market_invalid_decimal_places", market_id=market_id, decimal_places=dp, default_dp=0)
            return 0
        return dp
