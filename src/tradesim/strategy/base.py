"""Strategy interface consumed by the simulation engine."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from tradesim.market.models import PriceBar
from tradesim.portfolio.models import Portfolio, Trade


@runtime_checkable
class TradingStrategy(Protocol):
    """Decision policy called once per trading day in chronological order.

    ``initialize`` must fully reset internal state so one instance can be
    reused across runs. ``decide`` receives every bar seen so far, the
    current one included, and returns at most one trade.
    """

    name: str

    def initialize(self) -> None:
        ...

    def decide(
        self,
        bar: PriceBar,
        portfolio: Portfolio,
        history: Sequence[PriceBar],
    ) -> Optional[Trade]:
        ...

    def finalize(self) -> None:
        ...
