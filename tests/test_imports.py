"""
Test that normalized imports (without 'src.' prefix) work correctly.

These tests validate that modules can be imported using the top-level
namespace when PYTHONPATH includes the src/ directory.
"""

from __future__ import annotations


def test_import_core_modules():
    """Test that core submodules can be imported."""
    from core import Backtest, BacktestConfig, ConsolidatedSignal, Direction, Metrics
    from core.config_loader import get_config
    from core.costs import trade_costs
    from core.pipeline import run_pipeline

    assert Backtest is not None
    assert BacktestConfig is not None
    assert ConsolidatedSignal is not None
    assert Direction is not None
    assert Metrics is not None
    assert get_config is not None
    assert trade_costs is not None
    assert run_pipeline is not None


def test_import_strategies_modules():
    """Test that signal stages can be imported."""
    from strategies import (
        ThresholdSpec,
        consolidate_signals,
        evaluate_triggers,
        generate_signals,
    )

    assert ThresholdSpec is not None
    assert evaluate_triggers is not None
    assert generate_signals is not None
    assert consolidate_signals is not None


def test_import_data_and_report_modules():
    """Test that data/report/optimize modules can be imported."""
    from data.feeds.csv_feed import load_pair_csv
    from features import log_returns, rolling_zscore
    from optimize import sweep_entry_thresholds
    from report.serialize import metrics_to_json

    assert load_pair_csv is not None
    assert log_returns is not None
    assert rolling_zscore is not None
    assert sweep_entry_thresholds is not None
    assert metrics_to_json is not None
