"""Barridos de parámetros sobre el pipeline de backtest."""

from optimize.grid import SweepResult, entry_grid, sweep_entry_thresholds, symmetric_specs

__all__ = ["SweepResult", "entry_grid", "symmetric_specs", "sweep_entry_thresholds"]
