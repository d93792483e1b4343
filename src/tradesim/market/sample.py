"""Synthetic daily bars in the Yahoo Finance CSV layout.

Prices follow a random walk with Gaussian noise, one bar per weekday. The
output is meant for local testing when no real exports are at hand.
"""

from __future__ import annotations

import csv
import random
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Iterable, Optional, Sequence

from tradesim.market.loader import CSV_COLUMNS
from tradesim.market.models import PriceBar
from tradesim.monitoring.notifier import Notifier

DEFAULT_SYMBOLS = ("AAPL", "TSLA", "MSFT", "GOOGL", "AMZN", "NVDA", "META", "SPY")
STARTING_PRICES = {
    "AAPL": 180.0,
    "TSLA": 240.0,
    "MSFT": 370.0,
    "GOOGL": 140.0,
    "AMZN": 150.0,
    "NVDA": 480.0,
    "META": 350.0,
    "SPY": 450.0,
}
DEFAULT_STARTING_PRICE = 100.0
DEFAULT_VOLATILITY = 0.02

CENT = Decimal("0.01")
MIN_VOLUME = 10_000_000
VOLUME_SPAN = 90_000_000


def starting_price_for(symbol: str) -> float:
    return STARTING_PRICES.get(symbol, DEFAULT_STARTING_PRICE)


def _cents(value: float) -> Decimal:
    return max(Decimal(repr(value)).quantize(CENT, rounding=ROUND_HALF_UP), CENT)


def generate_bars(
    symbol: str,
    start: date,
    end: date,
    starting_price: float = DEFAULT_STARTING_PRICE,
    volatility: float = DEFAULT_VOLATILITY,
    rng: Optional[random.Random] = None,
) -> list[PriceBar]:
    """One bar per weekday in ``[start, end]``, each opening near the previous close."""
    if starting_price <= 0:
        raise ValueError(f"starting_price must be positive, got {starting_price}")
    if not 0 <= volatility <= 1:
        raise ValueError(f"volatility must be within [0, 1], got {volatility}")
    rng = rng or random.Random()

    bars: list[PriceBar] = []
    previous_close = starting_price
    day = start
    while day <= end:
        if day.weekday() < 5:
            daily_return = rng.gauss(0.0, 1.0) * volatility
            open_ = previous_close * (1 + rng.gauss(0.0, 1.0) * volatility * 0.3)
            close = open_ * (1 + daily_return)
            high = max(open_, close) * (1 + abs(rng.gauss(0.0, 1.0)) * volatility * 0.5)
            low = min(open_, close) * (1 - abs(rng.gauss(0.0, 1.0)) * volatility * 0.5)
            volume = MIN_VOLUME + rng.randrange(VOLUME_SPAN)

            # rounding can push the body outside the wicks
            open_d, close_d = _cents(open_), _cents(close)
            high_d = max(_cents(high), open_d, close_d)
            low_d = min(_cents(low), open_d, close_d)
            bars.append(
                PriceBar(
                    date=day,
                    symbol=symbol,
                    open=open_d,
                    high=high_d,
                    low=low_d,
                    close=close_d,
                    adjusted_close=close_d,
                    volume=volume,
                )
            )
            previous_close = float(close_d)
        day += timedelta(days=1)
    return bars


def write_bars_csv(path: str | Path, bars: Iterable[PriceBar]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        for bar in bars:
            writer.writerow(
                [
                    bar.date.isoformat(),
                    f"{bar.open:.2f}",
                    f"{bar.high:.2f}",
                    f"{bar.low:.2f}",
                    f"{bar.close:.2f}",
                    f"{bar.adjusted_close:.2f}",
                    bar.volume,
                ]
            )
    return path


def generate_samples(
    symbols: Sequence[str],
    start: date,
    end: date,
    output_dir: str | Path = "tdata",
    volatility: float = DEFAULT_VOLATILITY,
    rng: Optional[random.Random] = None,
    notifier: Optional[Notifier] = None,
) -> dict[str, Path]:
    """Write ``<symbol>.csv`` for each symbol, sharing one generator across them."""
    if start > end:
        raise ValueError(f"start {start} is after end {end}")
    rng = rng or random.Random()
    output_dir = Path(output_dir)

    written: dict[str, Path] = {}
    for symbol in symbols:
        bars = generate_bars(symbol, start, end, starting_price_for(symbol), volatility, rng)
        written[symbol] = write_bars_csv(output_dir / f"{symbol}.csv", bars)
        if notifier is not None:
            notifier.notify("SAMPLE_WRITTEN", f"{symbol}: {len(bars)} bars to {written[symbol]}")
    return written
