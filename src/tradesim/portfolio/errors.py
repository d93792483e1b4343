"""Fatal simulation errors."""

from __future__ import annotations

from decimal import Decimal


class SimulationError(Exception):
    """Base class for errors that abort a simulation run."""


class NoMarketData(SimulationError):
    pass


class MarketDataError(SimulationError, ValueError):
    pass


class InsufficientFunds(SimulationError, ValueError):
    def __init__(self, required: Decimal, available: Decimal) -> None:
        super().__init__(f"Insufficient funds: have {available}, need {required}")
        self.required = required
        self.available = available


class InsufficientShares(SimulationError, ValueError):
    def __init__(self, symbol: str, requested: Decimal, held: Decimal) -> None:
        super().__init__(f"Insufficient shares of {symbol}: have {held}, trying to sell {requested}")
        self.symbol = symbol
        self.requested = requested
        self.held = held
