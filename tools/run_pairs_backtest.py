# ruff: noqa: E402
from __future__ import annotations

"""
Backtest de una estrategia por umbrales de z-score (pairs o un solo activo).

Uso:
    python tools/run_pairs_backtest.py --csv data/data.csv
    # Opcional:
    #   --config src/config/config.yaml   YAML alternativo
    #   --single                          solo activo 1 (sin pairs)
    #   --trading-costs 0.0005            override del coste por transición
    #   --zscore-window 30                override de la ventana
    #   --out runs/metrics.json           además de stdout, escribe el JSON

Convenciones de entrada:
- CSV con una columna por activo (por defecto series_1, series_2)
- YAML con secciones environment, backtest, data y signals

Salida:
- JSON de métricas por stdout (los logs van a stderr)
"""

# --- Asegurar que 'src/' está en sys.path cuando se ejecuta desde CLI ---
from pathlib import Path
import sys

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC_DIR = _REPO_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))
# -------------------------------------------------------------------------

import argparse
from dataclasses import replace

from loguru import logger

from core.config_loader import (
    backtest_config_from,
    get_config,
    get_nested,
    threshold_specs_from,
)
from core.errors import BacktestError
from core.logger_config import init_logger
from core.pipeline import run_pipeline
from data.feeds.csv_feed import load_pair_csv
from report.serialize import metrics_to_json


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Backtest por umbrales de z-score")
    ap.add_argument("--csv", default=None, help="CSV de precios (por defecto data.csv del YAML)")
    ap.add_argument("--config", default=None, help="Ruta alternativa al YAML")
    ap.add_argument("--single", action="store_true", help="Solo activo 1 (sin pairs)")
    ap.add_argument("--trading-costs", type=float, default=None)
    ap.add_argument("--zscore-window", type=int, default=None)
    ap.add_argument("--out", default=None, help="Ruta opcional para escribir el JSON")
    ap.add_argument("--log-level", default=None)
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    init_logger(level=args.log_level, log_dir=None)

    try:
        cfg = get_config(args.config)
        bt_cfg = backtest_config_from(cfg)
        if args.trading_costs is not None:
            bt_cfg = replace(bt_cfg, cost_rate=args.trading_costs)
        specs = threshold_specs_from(cfg)
        window = args.zscore_window or int(get_nested(cfg, "backtest", "zscore_window"))

        csv_path = args.csv or get_nested(cfg, "data", "csv")
        if not csv_path:
            raise BacktestError("No hay CSV: usa --csv o data.csv en el YAML.")
        col_1 = get_nested(cfg, "data", "col_1", default="series_1")
        col_2 = None if args.single else get_nested(cfg, "data", "col_2", default="series_2")
        prices_1, prices_2 = load_pair_csv(csv_path, col_1=col_1, col_2=col_2)

        metrics = run_pipeline(
            prices_1, prices_2, specs=specs, config=bt_cfg, zscore_window=window
        )
    except (BacktestError, FileNotFoundError, ValueError) as e:
        logger.error(f"Backtest fallido: {e}")
        return 1

    payload = metrics_to_json(metrics)
    print(payload)
    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Métricas escritas en {out}")

    logger.info(
        f"total_return={metrics.total_return} sharpe={metrics.sharpe_ratio} "
        f"max_dd={metrics.max_drawdown} trades={metrics.win_rate_stats.closed}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
