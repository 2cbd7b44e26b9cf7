"""Core backtest components."""

from core.backtest import Backtest, BacktestConfig, compute_win_rate_stats
from core.costs import Transition, classify_transition, trade_costs
from core.errors import BacktestError, ConfigError, PreconditionError
from core.types import ConsolidatedSignal, Direction, Metrics, WinRateStats

__all__ = [
    # Errors
    "BacktestError",
    "PreconditionError",
    "ConfigError",
    # Types
    "Direction",
    "ConsolidatedSignal",
    "WinRateStats",
    "Metrics",
    # Engine
    "Transition",
    "classify_transition",
    "trade_costs",
    "BacktestConfig",
    "Backtest",
    "compute_win_rate_stats",
]
