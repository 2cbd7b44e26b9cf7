from __future__ import annotations

import pytest

from core.backtest import BacktestConfig
from core.errors import PreconditionError
from core.types import Direction
from optimize import entry_grid, sweep_entry_thresholds, symmetric_specs
from strategies.signals import evaluate_triggers


def test_entry_grid_inclusive_and_rounded():
    assert entry_grid(1.0, 2.0, 0.5) == [1.0, 1.5, 2.0]
    assert entry_grid(0.1, 0.3, 0.1) == [0.1, 0.2, 0.3]


@pytest.mark.parametrize("low, high, step", [(1.0, 2.0, 0.0), (2.0, 1.0, 0.5)])
def test_entry_grid_rejects_bad_ranges(low, high, step):
    with pytest.raises(PreconditionError):
        entry_grid(low, high, step)


def test_symmetric_specs_open_outside_close_inside():
    long_spec, short_spec = symmetric_specs(1.5, 0.5)
    assert long_spec.direction is Direction.LONG
    assert short_spec.direction is Direction.SHORT

    z = [-2.0, -1.0, -0.5, 0.0, 1.0, 2.0]
    assert evaluate_triggers(z, long_spec) == [1.0, 0.0, -1.0, -1.0, -1.0, -1.0]
    assert evaluate_triggers(z, short_spec) == [-1.0, -1.0, -1.0, -1.0, 0.0, 1.0]


def test_sweep_sorted_by_sharpe(pair_prices):
    p1, p2 = pair_prices
    results = sweep_entry_thresholds(
        p1, p2, entries=[1.0, 1.5, 2.0], config=BacktestConfig(cost_rate=0.0005), zscore_window=10
    )
    assert sorted(r.entry for r in results) == [1.0, 1.5, 2.0]
    sharpes = [r.metrics.sharpe_ratio for r in results]
    assert sharpes == sorted(sharpes, reverse=True)


def test_sweep_rejects_empty_grid(pair_prices):
    p1, p2 = pair_prices
    with pytest.raises(PreconditionError):
        sweep_entry_thresholds(p1, p2, entries=[])


def test_sweep_in_process_pool_matches_serial(pair_prices):
    p1, p2 = pair_prices
    serial = sweep_entry_thresholds(p1, p2, entries=[1.0, 2.0], zscore_window=10)
    parallel = sweep_entry_thresholds(p1, p2, entries=[1.0, 2.0], zscore_window=10, max_workers=2)
    assert {r.entry: r.metrics for r in serial} == {r.entry: r.metrics for r in parallel}
