from __future__ import annotations

import argparse
import random
from datetime import date, timedelta
from pathlib import Path

from tradesim.market import DEFAULT_SYMBOLS, generate_samples
from tradesim.monitoring import LogNotifier


def _parse_date(parser: argparse.ArgumentParser, value: str | None, flag: str) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        parser.error(f"{flag} must be YYYY-MM-DD, got {value!r}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Write synthetic daily bars for local runs.")
    parser.add_argument("--output-dir", default="tdata")
    parser.add_argument("--symbols", nargs="+", default=list(DEFAULT_SYMBOLS))
    parser.add_argument("--start", help="first date, YYYY-MM-DD (default: --years before --end)")
    parser.add_argument("--end", help="last date, YYYY-MM-DD (default: today)")
    parser.add_argument("--years", type=int, default=2)
    parser.add_argument("--volatility", type=float, default=0.02)
    parser.add_argument("--seed", type=int, help="seed for reproducible output")
    args = parser.parse_args()

    end = _parse_date(parser, args.end, "--end") or date.today()
    start = _parse_date(parser, args.start, "--start") or end - timedelta(days=365 * args.years)
    if start > end:
        parser.error(f"--start {start} is after --end {end}")

    output_dir = Path(args.output_dir)
    written = generate_samples(
        args.symbols,
        start,
        end,
        output_dir=output_dir,
        volatility=args.volatility,
        rng=random.Random(args.seed),
        notifier=LogNotifier(prefix="[SAMPLE]"),
    )

    print(f"Wrote {len(written)} files for {start} to {end} to {output_dir}")
    print("Sample data is synthetic; use real exports for research.")


if __name__ == "__main__":
    main()
