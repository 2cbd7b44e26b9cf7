from __future__ import annotations

import math

import pytest

from core.errors import PreconditionError
from core.metrics import (
    calculate_annualized_return,
    calculate_drawdowns,
    calculate_mean_return,
    calculate_sharpe,
    calculate_sortino,
    equity_curve,
    evaluate,
    round_float,
)
from core.types import WinRateStats
from report.serialize import metrics_to_json

STATS = WinRateStats(win_rate=0.5, opened=2, closed=2, closed_profit=1)
RETURNS = [0.1, -0.05, 0.0, 0.02]


def test_equity_curve_is_normalised_cumulative_sum():
    curve = equity_curve(RETURNS)
    expected = [math.exp(x) - 1 for x in (0.1, 0.05, 0.05, 0.07)]
    assert list(curve) == pytest.approx(expected)


def test_drawdowns_track_running_max():
    dd = calculate_drawdowns([0.0, 0.1, 0.05, 0.2, 0.15])
    assert list(dd) == pytest.approx([0.0, 0.0, -0.05, 0.0, -0.05])
    assert all(x <= 0 for x in dd)


def test_drawdowns_on_empty_curve_fail():
    with pytest.raises(PreconditionError):
        calculate_drawdowns([])


def test_mean_return_ignores_flat_periods():
    assert calculate_mean_return([0.0, 0.02, 0.0, 0.04]) == pytest.approx(0.03)
    assert calculate_mean_return([0.0, 0.0]) == 0.0


def test_annualized_return_formula():
    assert calculate_annualized_return(0.001) == pytest.approx(1.001**252 - 1)
    assert calculate_annualized_return(0.0) == 0.0


def test_sharpe_population_statistics():
    mean = sum(RETURNS) / 4
    std = math.sqrt(sum((r - mean) ** 2 for r in RETURNS) / 4)
    assert calculate_sharpe(RETURNS) == pytest.approx(mean / std)


def test_sortino_uses_negative_returns_only():
    # mean = 0.0175, downside = sqrt(0.05**2)
    assert calculate_sortino(RETURNS) == pytest.approx(0.35)


@pytest.mark.parametrize("series", [[], [0.0, 0.0, 0.0]])
def test_ratio_guards_return_zero(series):
    assert calculate_sharpe(series) == 0.0
    assert calculate_sortino(series) == 0.0


def test_sortino_without_negative_returns_is_zero():
    assert calculate_sortino([0.01, 0.02, 0.0]) == 0.0


def test_evaluate_rounds_for_presentation():
    m = evaluate(RETURNS, STATS)
    assert m.equity_curve == (0.105, 0.051, 0.051, 0.073)
    assert m.drawdown_series == (0.0, -0.054, -0.054, -0.033)
    assert m.max_drawdown == -0.05
    assert m.mean_return == 0.023
    assert m.annualized_return == pytest.approx((1 + 0.07 / 3) ** 252 - 1, abs=0.01)
    assert m.sharpe_ratio == 0.32
    assert m.sortino_ratio == 0.35
    assert m.total_return == 0.07
    assert m.win_rate_stats == STATS


def test_all_zero_returns_are_degenerate_not_errors():
    m = evaluate([0.0] * 10, WinRateStats(0.0, 0, 0, 0))
    assert m.sharpe_ratio == 0
    assert m.sortino_ratio == 0
    assert m.mean_return == 0
    assert m.max_drawdown == 0
    assert m.total_return == 0
    assert set(m.drawdown_series) == {0.0}


def test_evaluate_is_idempotent():
    a = evaluate(RETURNS, STATS)
    b = evaluate(list(RETURNS), STATS)
    assert a == b
    assert metrics_to_json(a) == metrics_to_json(b)


def test_evaluate_rejects_empty_input():
    with pytest.raises(PreconditionError):
        evaluate([], STATS)


def test_round_float_never_returns_negative_zero():
    assert math.copysign(1.0, round_float(-0.0001, 2)) == 1.0
