"""
Core metrics package.

Performance metrics over portfolio log-returns (equity curve, drawdowns,
Sharpe, Sortino, annualized return) and the final `evaluate()` entry point.
"""

from __future__ import annotations

from .performance import (
    PERIODS_PER_YEAR,
    PRECISION,
    calculate_annualized_return,
    calculate_drawdowns,
    calculate_mean_return,
    calculate_sharpe,
    calculate_sortino,
    cumulative_returns,
    equity_curve,
    evaluate,
    normalise_returns,
    round_float,
)

__all__ = [
    "PERIODS_PER_YEAR",
    "PRECISION",
    "round_float",
    "cumulative_returns",
    "normalise_returns",
    "equity_curve",
    "calculate_drawdowns",
    "calculate_mean_return",
    "calculate_annualized_return",
    "calculate_sharpe",
    "calculate_sortino",
    "evaluate",
]
