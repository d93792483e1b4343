"""Portfolio state and trade records."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from tradesim.portfolio.errors import InsufficientFunds, InsufficientShares

ZERO = Decimal("0")


def _check_price(symbol: str, price: Decimal) -> None:
    if price < ZERO:
        raise ValueError(f"Price for {symbol} cannot be negative, got {price}")


class TradeAction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class Trade:
    date: date
    action: TradeAction
    symbol: str
    shares: Decimal
    price: Decimal
    note: Optional[str] = None

    def __post_init__(self) -> None:
        if self.shares <= ZERO:
            raise ValueError(f"Trade shares must be positive, got {self.shares}")
        if self.price < ZERO:
            raise ValueError(f"Trade price must be non-negative, got {self.price}")

    @property
    def notional(self) -> Decimal:
        return self.shares * self.price


@dataclass(frozen=True)
class Portfolio:
    """Cash plus long positions. Every transition returns a new instance."""

    cash: Decimal
    positions: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.cash < ZERO:
            raise ValueError(f"Portfolio cash cannot be negative, got {self.cash}")
        for symbol, shares in self.positions.items():
            if shares < ZERO:
                raise ValueError(f"Position in {symbol} cannot be negative, got {shares}")
        # read-only view; transitions build a fresh dict
        held = {s: q for s, q in self.positions.items() if q != ZERO}
        object.__setattr__(self, "positions", MappingProxyType(held))

    def total_value(self, prices: Mapping[str, Decimal]) -> Decimal:
        stock_value = sum(
            (shares * prices.get(symbol, ZERO) for symbol, shares in self.positions.items()),
            ZERO,
        )
        return self.cash + stock_value

    def buy(self, symbol: str, shares: Decimal, price: Decimal) -> Portfolio:
        if shares <= ZERO:
            raise ValueError(f"Cannot buy {shares} shares of {symbol}")
        _check_price(symbol, price)
        cost = shares * price
        if cost > self.cash:
            raise InsufficientFunds(required=cost, available=self.cash)
        positions = dict(self.positions)
        positions[symbol] = positions.get(symbol, ZERO) + shares
        return replace(self, cash=self.cash - cost, positions=positions)

    def sell(self, symbol: str, shares: Decimal, price: Decimal) -> Portfolio:
        if shares <= ZERO:
            raise ValueError(f"Cannot sell {shares} shares of {symbol}")
        _check_price(symbol, price)
        held = self.shares_of(symbol)
        if held < shares:
            raise InsufficientShares(symbol=symbol, requested=shares, held=held)
        positions = dict(self.positions)
        remaining = held - shares
        if remaining == ZERO:
            del positions[symbol]
        else:
            positions[symbol] = remaining
        return replace(self, cash=self.cash + shares * price, positions=positions)

    def apply(self, trade: Trade) -> Portfolio:
        if trade.action == TradeAction.BUY:
            return self.buy(trade.symbol, trade.shares, trade.price)
        return self.sell(trade.symbol, trade.shares, trade.price)

    def shares_of(self, symbol: str) -> Decimal:
        return self.positions.get(symbol, ZERO)

    def has_position(self, symbol: str) -> bool:
        return symbol in self.positions
