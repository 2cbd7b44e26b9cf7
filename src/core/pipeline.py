# src/core/pipeline.py
"""
Pipeline completo: precios -> z-score -> triggers -> señales -> señal neta
-> log-retornos de cartera (con costes) -> métricas.

Alineación
----------
La señal en el índice de precio `i` es la posición que gana el retorno de
`i-1` a `i`, así que la señal neta se recorta con [1:] para medir lo mismo
que los log-retornos (len(precios) - 1).
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from core.backtest import BacktestConfig
from core.errors import PreconditionError, ensure_same_length
from core.types import ConsolidatedSignal, Metrics
from features.statistics import log_returns, rolling_zscore, spread_standard
from strategies.signals import (
    ThresholdSpec,
    consolidate_signals,
    evaluate_triggers,
    generate_signals,
)

DEFAULT_ZSCORE_WINDOW = 21


def indicator_series(
    prices_1: Sequence[float],
    prices_2: Sequence[float] | None,
    zscore_window: int = DEFAULT_ZSCORE_WINDOW,
) -> list[float]:
    """Z-score móvil del spread (pairs) o del precio del activo 1 (single)."""
    if prices_2 is not None:
        return rolling_zscore(spread_standard(prices_1, prices_2), zscore_window)
    return rolling_zscore(prices_1, zscore_window)


def build_signal(series: Sequence[float], specs: Sequence[ThresholdSpec]) -> ConsolidatedSignal:
    """Una serie de señales por spec (en su dirección) y consolidación en orden."""
    streams = [generate_signals(evaluate_triggers(series, s), s.direction) for s in specs]
    return consolidate_signals(streams)


def run_pipeline(
    prices_1: Sequence[float],
    prices_2: Sequence[float] | None = None,
    *,
    specs: Sequence[ThresholdSpec],
    config: BacktestConfig | None = None,
    zscore_window: int = DEFAULT_ZSCORE_WINDOW,
) -> Metrics:
    """
    Ejecuta el backtest de principio a fin.

    Args:
        prices_1: Precios del activo 1
        prices_2: Precios del activo 2 (None = un solo activo)
        specs: Umbrales; el orden define la precedencia en la consolidación
        config: Costes y pesos (por defecto BacktestConfig())
        zscore_window: Ventana del z-score móvil

    Raises:
        PreconditionError: menos de 2 precios, longitudes distintas o sin specs
    """
    if len(prices_1) < 2:
        raise PreconditionError("Se necesitan al menos 2 precios para calcular retornos.")
    if prices_2 is not None:
        ensure_same_length("prices_1", len(prices_1), "prices_2", len(prices_2))
    if not specs:
        raise PreconditionError("run_pipeline necesita al menos un ThresholdSpec.")

    cfg = config or BacktestConfig()
    series = indicator_series(prices_1, prices_2, zscore_window)
    signal = build_signal(series, specs).sliced(1)

    rets_1 = log_returns(prices_1)
    rets_2 = log_returns(prices_2) if prices_2 is not None else None
    logger.debug(
        f"Pipeline: {len(prices_1)} precios | specs={len(specs)} | ventana z={zscore_window}"
    )
    return cfg.with_signal(signal).run_backtest(rets_1, rets_2)
