# ruff: noqa: E402
from __future__ import annotations

"""
Barrido de niveles de entrada |z| para la estrategia simétrica long/short.

Uso:
    python tools/sweep_thresholds.py --csv data/data.csv --low 1.0 --high 2.5 --step 0.25
    # --exit 0.0  --workers 4  --single  --top 5
"""

from pathlib import Path
import sys

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC_DIR = _REPO_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

import argparse
import json

from loguru import logger

from core.config_loader import backtest_config_from, get_config, get_nested
from core.errors import BacktestError
from core.logger_config import init_logger
from data.feeds.csv_feed import load_pair_csv
from optimize.grid import entry_grid, sweep_entry_thresholds
from report.serialize import to_dict


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Grid de umbrales de entrada")
    ap.add_argument("--csv", required=True)
    ap.add_argument("--config", default=None)
    ap.add_argument("--low", type=float, default=1.0)
    ap.add_argument("--high", type=float, default=2.5)
    ap.add_argument("--step", type=float, default=0.25)
    ap.add_argument("--exit", type=float, default=0.0)
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--single", action="store_true")
    ap.add_argument("--top", type=int, default=5)
    args = ap.parse_args(argv)

    init_logger(log_dir=None)
    try:
        cfg = get_config(args.config)
        col_2 = None if args.single else get_nested(cfg, "data", "col_2", default="series_2")
        prices_1, prices_2 = load_pair_csv(
            args.csv, col_1=get_nested(cfg, "data", "col_1", default="series_1"), col_2=col_2
        )
        results = sweep_entry_thresholds(
            prices_1,
            prices_2,
            entries=entry_grid(args.low, args.high, args.step),
            exit_level=args.exit,
            config=backtest_config_from(cfg),
            zscore_window=int(get_nested(cfg, "backtest", "zscore_window")),
            max_workers=args.workers,
        )
    except (BacktestError, FileNotFoundError, ValueError) as e:
        logger.error(f"Barrido fallido: {e}")
        return 1

    rows = [
        {
            "entry": r.entry,
            "exit": r.exit_level,
            "sharpe_ratio": r.metrics.sharpe_ratio,
            "sortino_ratio": r.metrics.sortino_ratio,
            "total_return": r.metrics.total_return,
            "max_drawdown": r.metrics.max_drawdown,
            "win_rate_stats": to_dict(r.metrics.win_rate_stats),
        }
        for r in results[: args.top]
    ]
    print(json.dumps(rows, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
