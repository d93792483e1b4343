"""Common indicator helpers for strategies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from tradesim.market.models import PriceBar


@dataclass
class IndicatorSeries:
    dates: list[date]
    closes: list[Decimal]

    def __init__(self) -> None:
        self.dates = []
        self.closes = []

    @classmethod
    def from_bars(cls, bars: Iterable[PriceBar]) -> IndicatorSeries:
        series = cls()
        for bar in bars:
            series.update(bar)
        return series

    def update(self, bar: PriceBar) -> None:
        self.dates.append(bar.date)
        self.closes.append(bar.close)

    def sma(self, window: int, offset: int = 0) -> Optional[Decimal]:
        """Simple moving average ending ``offset`` bars before the latest one."""
        end = len(self.closes) - offset
        if window <= 0 or end < window:
            return None
        slice_ = self.closes[end - window : end]
        return sum(slice_, Decimal("0")) / window
