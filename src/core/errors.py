# src/core/errors.py
"""
Errores de dominio del backtester.

- `BacktestError`: base común, para capturar todo lo del pipeline de una vez.
- `PreconditionError`: el llamador violó un contrato (listas vacías, longitudes
  distintas, backtest sin señal, métricas sobre serie vacía).
- `ConfigError`: configuración o umbrales mal formados.

PreconditionError y ConfigError también son ValueError.
"""

from __future__ import annotations


class BacktestError(Exception):
    """Error general del pipeline de backtest."""

    pass


class PreconditionError(BacktestError, ValueError):
    """Violación de precondición (nunca se corrige en silencio)."""

    pass


class ConfigError(BacktestError, ValueError):
    """Umbrales o configuración inválidos."""

    pass


def ensure_same_length(name_a: str, a_len: int, name_b: str, b_len: int) -> None:
    if a_len != b_len:
        raise PreconditionError(
            f"{name_a} y {name_b} deben tener la misma longitud ({a_len} != {b_len})."
        )
