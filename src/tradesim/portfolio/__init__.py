"""Portfolio state, trades and fatal errors."""

from tradesim.portfolio.errors import (
    InsufficientFunds,
    InsufficientShares,
    MarketDataError,
    NoMarketData,
    SimulationError,
)
from tradesim.portfolio.models import Portfolio, Trade, TradeAction

__all__ = [
    "InsufficientFunds",
    "InsufficientShares",
    "MarketDataError",
    "NoMarketData",
    "Portfolio",
    "SimulationError",
    "Trade",
    "TradeAction",
]
