"""Buy-and-hold reference strategy."""

from __future__ import annotations

from typing import Optional, Sequence

from tradesim.market.models import PriceBar
from tradesim.portfolio.models import Portfolio, Trade, TradeAction
from tradesim.strategy.sizing import affordable_shares


class BuyAndHoldStrategy:
    """Invest all cash at the first close while flat, then hold to the end."""

    name = "Buy and Hold"

    def __init__(self) -> None:
        self._has_bought = False

    def initialize(self) -> None:
        self._has_bought = False

    def decide(
        self,
        bar: PriceBar,
        portfolio: Portfolio,
        history: Sequence[PriceBar],
    ) -> Optional[Trade]:
        if self._has_bought or portfolio.has_position(bar.symbol):
            return None
        self._has_bought = True

        shares = affordable_shares(portfolio.cash, bar.close)
        if shares <= 0:
            return None
        return Trade(
            date=bar.date,
            action=TradeAction.BUY,
            symbol=bar.symbol,
            shares=shares,
            price=bar.close,
            note="Initial buy - Buy and Hold strategy",
        )

    def finalize(self) -> None:
        return None


def build_buy_and_hold_from_config(parameters: dict) -> BuyAndHoldStrategy:
    if parameters:
        raise ValueError(f"buy_and_hold takes no parameters, got {sorted(parameters)}")
    return BuyAndHoldStrategy()
