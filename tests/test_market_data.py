from datetime import date
from decimal import Decimal

import pytest

from tradesim.market import PriceBar, ensure_chronological, filter_date_range, load_bars_csv, load_symbol
from tradesim.monitoring import RecordingNotifier
from tradesim.portfolio import MarketDataError


def _bar(day: date, close: str, symbol: str = "AAPL") -> PriceBar:
    price = Decimal(close)
    return PriceBar(day, symbol, price, price, price, price, price, 100)


CSV_TEXT = """Date,Open,High,Low,Close,Adj Close,Volume
2023-12-22,196.10,197.08,193.50,193.60,192.99,37122800
2023-12-21,195.18,196.95,195.09,196.75,196.13,52242800

2023-12-26,193.61,193.89,192.83,not-a-price,192.44,28919300
2023-12-27,192.49,193.50,191.09,193.15,192.54,48087700
2023-12-28,194.14,194.66,193.17,193.58,192.97
"""


def test_load_bars_csv_sorts_and_skips_bad_rows(tmp_path):
    path = tmp_path / "AAPL.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    notifier = RecordingNotifier()

    bars = load_bars_csv(path, notifier=notifier)

    assert [bar.date for bar in bars] == [date(2023, 12, 21), date(2023, 12, 22), date(2023, 12, 27)]
    assert all(bar.symbol == "AAPL" for bar in bars)
    assert bars[0].close == Decimal("196.75")
    assert bars[0].adjusted_close == Decimal("196.13")
    assert bars[0].volume == 52242800
    assert notifier.names == ["DATA_SKIP", "DATA_SKIP"]


def test_load_bars_csv_symbol_override(tmp_path):
    path = tmp_path / "prices.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    bars = load_bars_csv(path, symbol="XYZ")
    assert {bar.symbol for bar in bars} == {"XYZ"}


def test_load_symbol_reads_from_data_dir(tmp_path):
    (tmp_path / "MSFT.csv").write_text(CSV_TEXT, encoding="utf-8")
    bars = load_symbol("MSFT", tmp_path)
    assert len(bars) == 3
    assert bars[-1].symbol == "MSFT"


def test_missing_and_empty_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_bars_csv(tmp_path / "nope.csv")
    empty = tmp_path / "EMPTY.csv"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_bars_csv(empty)


def test_filter_date_range_is_inclusive():
    bars = [_bar(date(2024, 1, day), "10") for day in range(1, 6)]
    filtered = filter_date_range(bars, date(2024, 1, 2), date(2024, 1, 4))
    assert [bar.date.day for bar in filtered] == [2, 3, 4]
    assert len(filter_date_range(bars, start=date(2024, 1, 4))) == 2
    assert len(filter_date_range(bars, end=date(2024, 1, 1))) == 1
    assert filter_date_range(bars) == bars


def test_price_bar_invariants():
    with pytest.raises(ValueError):
        PriceBar(date(2024, 1, 2), "AAPL", Decimal("10"), Decimal("9"), Decimal("8"), Decimal("9.5"), Decimal("9.5"), 1)
    with pytest.raises(ValueError):
        PriceBar(date(2024, 1, 2), "AAPL", Decimal("10"), Decimal("11"), Decimal("10.5"), Decimal("10.7"), Decimal("10.7"), 1)
    with pytest.raises(ValueError):
        PriceBar(date(2024, 1, 2), "AAPL", Decimal("10"), Decimal("11"), Decimal("9"), Decimal("10"), Decimal("10"), -1)


def test_typical_price_rounds_to_eight_places():
    bar = PriceBar(date(2024, 1, 2), "AAPL", Decimal("10"), Decimal("11"), Decimal("9"), Decimal("10"), Decimal("10"), 1)
    assert bar.typical == Decimal("10.00000000")
    bar = PriceBar(date(2024, 1, 2), "AAPL", Decimal("1"), Decimal("2"), Decimal("1"), Decimal("1"), Decimal("1"), 1)
    assert bar.typical == Decimal("1.33333333")


def test_ensure_chronological_rejects_disorder_and_foreign_symbols():
    ordered = [_bar(date(2024, 1, 2), "10"), _bar(date(2024, 1, 3), "11")]
    ensure_chronological(ordered, "AAPL")

    with pytest.raises(MarketDataError):
        ensure_chronological(list(reversed(ordered)), "AAPL")
    with pytest.raises(MarketDataError):
        ensure_chronological([ordered[0], ordered[0]], "AAPL")
    with pytest.raises(MarketDataError):
        ensure_chronological([_bar(date(2024, 1, 2), "10", symbol="MSFT")], "AAPL")
