"""Bot classification against a counterparty whitelist."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, AbstractSet

if TYPE_CHECKING:
    from vdbexport.export.stats import AtomicCounter
    from vdbexport.models import Trade


@dataclass(frozen=True)
class Classification:
    keep: bool
    is_bot: bool


KEEP = Classification(keep=True, is_bot=False)
KEEP_BOT = Classification(keep=True, is_bot=True)
DROP = Classification(keep=False, is_bot=True)


def is_known(trade: Trade, whitelist: AbstractSet[str]) -> bool:
    """A trade is known if either side is whitelisted."""
    return trade.buyer in whitelist or trade.seller in whitelist


def classify(
    trade: Trade,
    whitelist: AbstractSet[str],
    exclude: bool,
    excluded: AtomicCounter | None = None,
) -> Classification:
    """
    Known trades are always kept and not bots.
    Bot<>bot trades are dropped when exclude is set (and counted in excluded),
    otherwise kept and tagged as bot.
    """
    if is_known(trade, whitelist):
        return KEEP
    if exclude:
        if excluded is not None:
            excluded.inc()
        return DROP
    return KEEP_BOT
