# src/features/__init__.py
"""
Entradas estadísticas para estrategias por umbrales.

Módulos:
- statistics: log-retornos, spread cubierto (pairs) y z-score móvil
"""

from .statistics import hedge_ratio, log_returns, rolling_zscore, spread_standard

__all__ = [
    "log_returns",
    "hedge_ratio",
    "spread_standard",
    "rolling_zscore",
]
