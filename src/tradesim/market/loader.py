"""Daily bar loading from Yahoo Finance style CSV exports."""

from __future__ import annotations

import csv
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Optional, Sequence

from tradesim.market.models import PriceBar
from tradesim.monitoring.notifier import Notifier
from tradesim.portfolio.errors import MarketDataError

CSV_COLUMNS = ("Date", "Open", "High", "Low", "Close", "Adj Close", "Volume")


def _parse_row(row: Sequence[str], symbol: str) -> PriceBar:
    if len(row) < len(CSV_COLUMNS):
        raise ValueError(f"expected {len(CSV_COLUMNS)} columns, got {len(row)}")
    fields = [value.strip() for value in row]
    try:
        return PriceBar(
            date=date.fromisoformat(fields[0]),
            symbol=symbol,
            open=Decimal(fields[1]),
            high=Decimal(fields[2]),
            low=Decimal(fields[3]),
            close=Decimal(fields[4]),
            adjusted_close=Decimal(fields[5]),
            volume=int(fields[6]),
        )
    except InvalidOperation as exc:
        raise ValueError(f"invalid decimal in {list(fields)}") from exc


def load_bars_csv(
    path: str | Path,
    symbol: Optional[str] = None,
    notifier: Optional[Notifier] = None,
) -> list[PriceBar]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Market data file not found: {path}")
    symbol = symbol or path.stem

    with path.open("r", encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    if not rows:
        raise ValueError(f"CSV file is empty: {path.name}")

    bars: list[PriceBar] = []
    for line_no, row in enumerate(rows[1:], start=2):
        if not row or not "".join(row).strip():
            continue
        try:
            bars.append(_parse_row(row, symbol))
        except ValueError as exc:
            if notifier is not None:
                notifier.notify("DATA_SKIP", f"{path.name}:{line_no} {exc}")
    bars.sort(key=lambda bar: bar.date)
    return bars


def load_symbol(
    symbol: str,
    data_dir: str | Path = "tdata",
    notifier: Optional[Notifier] = None,
) -> list[PriceBar]:
    return load_bars_csv(Path(data_dir) / f"{symbol}.csv", symbol=symbol, notifier=notifier)


def filter_date_range(
    bars: Iterable[PriceBar],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[PriceBar]:
    return [
        bar
        for bar in bars
        if (start is None or bar.date >= start) and (end is None or bar.date <= end)
    ]


def ensure_chronological(bars: Sequence[PriceBar], symbol: str) -> None:
    """Reject bars for another symbol or not strictly ascending by date."""
    previous: Optional[date] = None
    for bar in bars:
        if bar.symbol != symbol:
            raise MarketDataError(f"bar for {bar.symbol} on {bar.date} in a {symbol} run")
        if previous is not None and bar.date <= previous:
            raise MarketDataError(f"bars out of order: {bar.date} follows {previous}")
        previous = bar.date
