import math
import sys
from pathlib import Path

import pytest

# Ensure the `src` folder is on sys.path when running pytest so imports like
# `from core import ...` or `from strategies.signals import ...` work without
# needing to install the package. This keeps tests consistent with running
# tools using PYTHONPATH=$(pwd)/src.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))


@pytest.fixture
def pair_prices() -> tuple[list[float], list[float]]:
    """Two co-moving price series with a mean-reverting spread (deterministic)."""
    n = 120
    p2 = [100.0 + 5.0 * math.sin(i / 9.0) + 0.05 * i for i in range(n)]
    p1 = [2.0 * b + 3.0 * math.sin(i / 2.5) for i, b in enumerate(p2)]
    return p1, p2


@pytest.fixture
def config_yaml(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        """
environment:
  log_level: INFO
backtest:
  trading_costs: 0.001
  weight_asset_1: 1.0
  weight_asset_2: 0.5
  periods_per_year: 252
  zscore_window: 10
data:
  csv: prices.csv
  col_1: series_1
  col_2: series_2
signals:
  - eq: [-1.5, 0.0]
    neq: [null, null]
    gt: [null, 0.0]
    lt: [-1.5, null]
    signal_type: Long
  - eq: [1.5, 0.0]
    neq: [null, null]
    gt: [1.5, null]
    lt: [null, 0.0]
    signal_type: Short
""",
        encoding="utf-8",
    )
    return path
