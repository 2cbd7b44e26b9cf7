# src/features/statistics.py
"""
Entradas estadísticas del pipeline: log-retornos, spread cubierto y z-score móvil.

- log_returns: ln(p[i] / p[i-1]), una posición más corta que los precios.
- hedge_ratio / spread_standard: spread de un par con ratio de cobertura OLS.
- rolling_zscore: (x - media móvil) / desviación móvil (poblacional).

Diseño:
- numpy para lo vectorial, pandas para las ventanas móviles.
- Las posiciones sin ventana completa (o con desviación 0) valen 0.0 para que
  ningún umbral se dispare con NaN.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from core.errors import PreconditionError, ensure_same_length


def _as_array(series: Sequence[float] | np.ndarray, name: str) -> np.ndarray:
    arr = np.asarray(series, dtype=float)
    if arr.ndim != 1:
        raise PreconditionError(f"{name} debe ser unidimensional.")
    return arr


def log_returns(prices: Sequence[float] | np.ndarray) -> list[float]:
    """Log-retornos paso a paso (se descarta el primer elemento)."""
    arr = _as_array(prices, "prices")
    if arr.size and np.any(arr <= 0):
        raise PreconditionError("Los precios deben ser > 0 para calcular log-retornos.")
    return np.diff(np.log(arr)).tolist()


def hedge_ratio(series_1: Sequence[float], series_2: Sequence[float]) -> float:
    """Pendiente OLS de series_1 sobre series_2 (con intercepto)."""
    a = _as_array(series_1, "series_1")
    b = _as_array(series_2, "series_2")
    ensure_same_length("series_1", a.size, "series_2", b.size)
    if a.size < 2:
        raise PreconditionError("hedge_ratio necesita al menos 2 observaciones.")
    if np.all(b == b[0]):
        raise PreconditionError("series_2 es constante: ratio de cobertura indefinido.")
    slope, _intercept = np.polyfit(b, a, 1)
    return float(slope)


def spread_standard(series_1: Sequence[float], series_2: Sequence[float]) -> list[float]:
    """Spread = series_1 - hedge_ratio * series_2."""
    ratio = hedge_ratio(series_1, series_2)
    a = _as_array(series_1, "series_1")
    b = _as_array(series_2, "series_2")
    return (a - ratio * b).tolist()


def rolling_zscore(series: Sequence[float], window: int) -> list[float]:
    """
    Z-score móvil con ventana `window` (misma longitud que la entrada).
    """
    if int(window) < 2:
        raise PreconditionError("window debe ser >= 2.")
    s = pd.Series(_as_array(series, "series"))
    roll = s.rolling(window=int(window), min_periods=int(window))
    mean = roll.mean()
    std = roll.std(ddof=0)
    z = (s - mean) / std.replace(0.0, np.nan)
    return z.fillna(0.0).astype(float).tolist()
