from __future__ import annotations

import argparse
import json
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from tradesim.config import load_config, parse_budget, serialize_config
from tradesim.monitoring import LogNotifier
from tradesim.runtime import create_run_context, run_from_config


def _serialize_result(result) -> dict:
    return {
        "strategy_name": result.strategy_name,
        "symbol": result.symbol,
        "start_date": result.start_date.isoformat(),
        "end_date": result.end_date.isoformat(),
        "initial_budget": str(result.initial_budget),
        "final_budget": str(result.final_budget),
        "total_return_percent": str(result.total_return_percent),
        "total_return_amount": str(result.total_return_amount),
        "max_drawdown_percent": str(result.max_drawdown_percent),
        "sharpe_ratio": str(result.sharpe_ratio),
        "winning_trades": result.winning_trades,
        "losing_trades": result.losing_trades,
        "data_points_used": result.data_points_used,
        "execution_time_ms": result.execution_time_ms,
        "trades": [
            {
                "date": trade.date.isoformat(),
                "action": trade.action.value,
                "shares": str(trade.shares),
                "price": str(trade.price),
                "total": str(trade.notional),
                "note": trade.note,
            }
            for trade in result.trades
        ],
        "equity_curve": [{"date": point.date.isoformat(), "value": str(point.value)} for point in result.equity_curve],
    }


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--symbol", help="override the configured symbol")
    parser.add_argument("--budget", help="override the configured initial budget")
    parser.add_argument("--output", help="write a JSON report to this path")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.symbol:
        config = replace(config, symbol=args.symbol)
    if args.budget:
        try:
            budget = parse_budget(args.budget)
        except ValueError as exc:
            parser.error(str(exc))
        config = replace(config, initial_budget=budget)

    context = create_run_context(args.config, config.run_id_prefix)
    notifier = LogNotifier(prefix=config.monitoring.notifier_prefix)
    result, run_id = run_from_config(config, context=context, notifier=notifier)

    print("Run:", context.run_id)
    print("Final value:", result.final_budget.quantize(Decimal("0.01")))
    print("Total return %:", result.total_return_percent.quantize(Decimal("0.01")))
    print("Max drawdown %:", result.max_drawdown_percent.quantize(Decimal("0.01")))
    print("Sharpe ratio:", result.sharpe_ratio.quantize(Decimal("0.0001")))
    print("Trades:", result.total_trades, f"({result.winning_trades} won, {result.losing_trades} lost)")
    if run_id is not None:
        print("Stored run id:", run_id)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        report = {
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "run_id": context.run_id,
            "config": serialize_config(config),
            "result": _serialize_result(result),
        }
        output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
        print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
