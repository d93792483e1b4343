import random
from datetime import date
from decimal import Decimal

import pytest

from tradesim.market import STARTING_PRICES, generate_bars, generate_samples, load_bars_csv, load_symbol, write_bars_csv
from tradesim.monitoring import RecordingNotifier
from tradesim.simulator import SimulationEngine
from tradesim.strategy import BuyAndHoldStrategy


def test_generated_bars_respect_ohlc_bounds():
    bars = generate_bars("AAPL", date(2024, 1, 1), date(2024, 12, 31), 180.0, 0.05, random.Random(7))

    assert bars
    for bar in bars:
        assert bar.high >= max(bar.open, bar.close)
        assert bar.low <= min(bar.open, bar.close)
        assert bar.low > 0
        assert bar.adjusted_close == bar.close
        assert 10_000_000 <= bar.volume < 100_000_000
        assert bar.close == bar.close.quantize(Decimal("0.01"))


def test_generated_bars_skip_weekends():
    # 2024-01-06/07 and 2024-01-13/14 are weekends
    bars = generate_bars("MSFT", date(2024, 1, 6), date(2024, 1, 14), rng=random.Random(1))

    assert [bar.date for bar in bars] == [date(2024, 1, day) for day in (8, 9, 10, 11, 12)]
    assert all(bar.date.weekday() < 5 for bar in bars)
    assert all(bar.symbol == "MSFT" for bar in bars)


def test_same_seed_gives_same_bars():
    first = generate_bars("TSLA", date(2024, 3, 1), date(2024, 4, 30), 240.0, rng=random.Random(42))
    second = generate_bars("TSLA", date(2024, 3, 1), date(2024, 4, 30), 240.0, rng=random.Random(42))
    other = generate_bars("TSLA", date(2024, 3, 1), date(2024, 4, 30), 240.0, rng=random.Random(43))

    assert first == second
    assert first != other


def test_walk_starts_near_starting_price():
    bars = generate_bars("SPY", date(2024, 1, 2), date(2024, 1, 2), 450.0, 0.0, random.Random(3))

    assert len(bars) == 1
    assert bars[0].open == bars[0].close == bars[0].high == bars[0].low == Decimal("450.00")


def test_written_csv_round_trips_through_loader(tmp_path):
    bars = generate_bars("NVDA", date(2024, 2, 1), date(2024, 3, 31), 480.0, rng=random.Random(5))
    path = write_bars_csv(tmp_path / "out" / "NVDA.csv", bars)
    notifier = RecordingNotifier()

    loaded = load_bars_csv(path, notifier=notifier)

    assert loaded == bars
    assert notifier.events == []
    assert path.read_text(encoding="utf-8").splitlines()[0] == "Date,Open,High,Low,Close,Adj Close,Volume"


def test_generate_samples_feeds_a_run(tmp_path):
    notifier = RecordingNotifier()
    written = generate_samples(
        ["AAPL", "XYZ"],
        date(2024, 1, 1),
        date(2024, 3, 29),
        output_dir=tmp_path,
        rng=random.Random(11),
        notifier=notifier,
    )

    assert sorted(written) == ["AAPL", "XYZ"]
    assert notifier.names == ["SAMPLE_WRITTEN", "SAMPLE_WRITTEN"]

    bars = load_symbol("AAPL", data_dir=tmp_path)
    assert abs(bars[0].open - Decimal(str(STARTING_PRICES["AAPL"]))) < Decimal("30")
    result = SimulationEngine(BuyAndHoldStrategy(), Decimal("10000")).run("AAPL", bars)
    assert result.data_points_used == len(bars)
    assert result.final_budget == result.equity_curve[-1].value

    unknown = load_symbol("XYZ", data_dir=tmp_path)
    assert abs(unknown[0].open - Decimal("100")) < Decimal("20")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"starting_price": 0.0},
        {"starting_price": -5.0},
        {"volatility": -0.1},
        {"volatility": 1.5},
    ],
)
def test_invalid_generator_arguments(kwargs):
    with pytest.raises(ValueError):
        generate_bars("AAPL", date(2024, 1, 1), date(2024, 1, 5), rng=random.Random(0), **kwargs)


def test_generate_samples_rejects_reversed_range(tmp_path):
    with pytest.raises(ValueError):
        generate_samples(["AAPL"], date(2024, 2, 1), date(2024, 1, 1), output_dir=tmp_path)
