"""Market data models and loaders."""

from tradesim.market.loader import ensure_chronological, filter_date_range, load_bars_csv, load_symbol
from tradesim.market.models import PriceBar
from tradesim.market.sample import DEFAULT_SYMBOLS, STARTING_PRICES, generate_bars, generate_samples, write_bars_csv

__all__ = [
    "DEFAULT_SYMBOLS",
    "PriceBar",
    "STARTING_PRICES",
    "ensure_chronological",
    "filter_date_range",
    "generate_bars",
    "generate_samples",
    "load_bars_csv",
    "load_symbol",
    "write_bars_csv",
]
