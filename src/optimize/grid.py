# src/optimize/grid.py
from __future__ import annotations

"""
Grid search de umbrales de entrada para la estrategia de z-score simétrica.

Cada punto del grid es un backtest independiente (funciones puras, sin
estado compartido), así que con `max_workers > 1` se reparten entre procesos
sin ninguna coordinación adicional.

Spec simétrica para un nivel de entrada `e` y salida `x`:
    Long : abre con z <= -e, cierra con z >= -x
    Short: abre con z >= +e, cierra con z <= +x
"""

from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

from loguru import logger

from core.backtest import BacktestConfig
from core.errors import PreconditionError
from core.pipeline import DEFAULT_ZSCORE_WINDOW, run_pipeline
from core.types import Direction, Metrics
from strategies.signals.types import ThresholdSpec


@dataclass(frozen=True)
class SweepResult:
    entry: float
    exit_level: float
    metrics: Metrics


def entry_grid(low: float, high: float, step: float) -> list[float]:
    """Valores [low, high] con paso `step` (redondeados para evitar 1.2000000001)."""
    if step <= 0:
        raise PreconditionError("step debe ser > 0.")
    if high < low:
        raise PreconditionError("high debe ser >= low.")
    values = []
    current = low
    while current <= high + 1e-12:
        values.append(round(current, 10))
        current += step
    return values


def symmetric_specs(entry: float, exit_level: float = 0.0) -> list[ThresholdSpec]:
    """Par long/short (en ese orden de precedencia) para un nivel de entrada."""
    long_spec = ThresholdSpec(
        gt=(None, -exit_level),
        lt=(-entry, None),
        direction=Direction.LONG,
    )
    short_spec = ThresholdSpec(
        gt=(entry, None),
        lt=(None, exit_level),
        direction=Direction.SHORT,
    )
    return [long_spec, short_spec]


def _run_one(
    task: tuple[Sequence[float], Sequence[float] | None, float, float, BacktestConfig, int],
) -> SweepResult:
    prices_1, prices_2, entry, exit_level, config, window = task
    metrics = run_pipeline(
        prices_1,
        prices_2,
        specs=symmetric_specs(entry, exit_level),
        config=config,
        zscore_window=window,
    )
    return SweepResult(entry=entry, exit_level=exit_level, metrics=metrics)


def sweep_entry_thresholds(
    prices_1: Sequence[float],
    prices_2: Sequence[float] | None = None,
    *,
    entries: Sequence[float],
    exit_level: float = 0.0,
    config: BacktestConfig | None = None,
    zscore_window: int = DEFAULT_ZSCORE_WINDOW,
    max_workers: int | None = None,
) -> list[SweepResult]:
    """
    Ejecuta un backtest por nivel de entrada y ordena por Sharpe (desc).

    Args:
        entries: Niveles de entrada |z| a probar
        exit_level: Nivel de salida |z| común
        max_workers: >1 reparte los backtests en un pool de procesos

    Raises:
        PreconditionError: grid vacío (y cualquier error de run_pipeline)
    """
    if not entries:
        raise PreconditionError("El grid de entradas está vacío.")
    cfg = config or BacktestConfig()
    p1 = list(prices_1)
    p2 = list(prices_2) if prices_2 is not None else None
    tasks = [(p1, p2, float(e), float(exit_level), cfg, zscore_window) for e in entries]

    if max_workers is not None and max_workers > 1:
        with ProcessPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(_run_one, tasks))
    else:
        results = [_run_one(t) for t in tasks]

    results.sort(key=lambda r: r.metrics.sharpe_ratio, reverse=True)
    if results:
        best = results[0]
        logger.info(
            f"Grid: {len(results)} puntos | mejor entrada={best.entry} "
            f"sharpe={best.metrics.sharpe_ratio} total={best.metrics.total_return}"
        )
    return results
