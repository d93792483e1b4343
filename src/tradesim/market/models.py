"""Market data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

PRICE_SCALE = Decimal("0.00000001")


@dataclass(frozen=True)
class PriceBar:
    date: date
    symbol: str
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    adjusted_close: Decimal
    volume: int

    def __post_init__(self) -> None:
        if self.high < max(self.open, self.close):
            raise ValueError(f"{self.symbol} {self.date}: high {self.high} below open/close")
        if self.low > min(self.open, self.close):
            raise ValueError(f"{self.symbol} {self.date}: low {self.low} above open/close")
        if self.volume < 0:
            raise ValueError(f"{self.symbol} {self.date}: negative volume {self.volume}")

    @property
    def typical(self) -> Decimal:
        return ((self.high + self.low + self.close) / 3).quantize(PRICE_SCALE, rounding=ROUND_HALF_UP)
