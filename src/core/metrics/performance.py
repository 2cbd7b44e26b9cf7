from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from core.errors import PreconditionError
from core.types import Metrics, WinRateStats

# -----------------------------------------------------------------------------
# Métricas de performance sobre log-retornos de cartera
# (Sharpe, Sortino, drawdown, retorno anualizado, equity normalizada)
# -----------------------------------------------------------------------------

PERIODS_PER_YEAR = 252  # barras diarias

# Decimales de presentación por campo (contrato externo al serializar)
PRECISION: dict[str, int] = {
    "annualized_return": 2,
    "drawdown_series": 3,
    "equity_curve": 3,
    "max_drawdown": 2,
    "mean_return": 3,
    "sharpe_ratio": 2,
    "sortino_ratio": 2,
    "total_return": 2,
    "win_rate": 2,
}


def round_float(value: float, decimals: int) -> float:
    # + 0.0 evita "-0.0" en la salida
    return float(round(float(value), decimals)) + 0.0


def _as_array(log_returns: Sequence[float] | np.ndarray) -> np.ndarray:
    return np.asarray(log_returns, dtype=float)


def cumulative_returns(log_returns: Sequence[float] | np.ndarray) -> np.ndarray:
    """Suma acumulada de log-retornos (un valor por paso)."""
    return np.cumsum(_as_array(log_returns))


def normalise_returns(log_returns: Sequence[float] | np.ndarray) -> np.ndarray:
    """Convierte log-retornos en retornos lineales: exp(x) - 1."""
    return np.expm1(_as_array(log_returns))


def equity_curve(log_returns: Sequence[float] | np.ndarray) -> np.ndarray:
    """Curva de equity normalizada: exp(cumsum(r)) - 1."""
    return normalise_returns(cumulative_returns(log_returns))


def calculate_drawdowns(curve: Sequence[float] | np.ndarray) -> np.ndarray:
    """
    Drawdown por paso respecto al máximo previo (sembrado en el índice 0).
    Valores <= 0; 0 en nuevos máximos.
    """
    arr = _as_array(curve)
    if arr.size == 0:
        raise PreconditionError("No se pueden calcular drawdowns sobre una curva vacía.")
    running_max = np.maximum.accumulate(arr)
    return arr - running_max


def calculate_mean_return(log_returns: Sequence[float] | np.ndarray) -> float:
    """
    Media aritmética de los log-retornos NO nulos.
    Los ceros (periodos sin posición) se excluyen para no diluir la media.
    """
    arr = _as_array(log_returns)
    nonzero = arr[arr != 0.0]
    if nonzero.size == 0:
        return 0.0
    return float(nonzero.mean())


def calculate_annualized_return(
    mean_return: float, periods_per_year: int = PERIODS_PER_YEAR
) -> float:
    """
    (1 + mean_return) ** periods_per_year - 1

    Se aplica tal cual sobre la media de log-retornos (no es un CAGR de manual).
    """
    return float((1.0 + mean_return) ** periods_per_year - 1.0)


def calculate_sharpe(log_returns: Sequence[float] | np.ndarray) -> float:
    """
    Sharpe sin tasa libre de riesgo: media / desviación estándar poblacional.
    Devuelve 0 si no hay muestras, la media es 0 o la varianza es 0.
    """
    arr = _as_array(log_returns)
    if arr.size == 0:
        return 0.0
    mean = float(arr.mean())
    if mean == 0.0:
        return 0.0
    variance = float(((arr - mean) ** 2).mean())
    if variance == 0.0:
        return 0.0
    return mean / variance**0.5


def calculate_sortino(log_returns: Sequence[float] | np.ndarray) -> float:
    """
    Sortino sin tasa libre de riesgo: media / sqrt(media de negativos al cuadrado).
    Solo penaliza la volatilidad negativa; 0 si no hay retornos negativos.
    """
    arr = _as_array(log_returns)
    if arr.size == 0:
        return 0.0
    mean = float(arr.mean())
    if mean == 0.0:
        return 0.0
    negatives = arr[arr < 0.0]
    if negatives.size == 0:
        return 0.0
    downside_variance = float((negatives**2).mean())
    if downside_variance == 0.0:
        return 0.0
    return mean / downside_variance**0.5


def evaluate(
    log_returns: Sequence[float] | np.ndarray,
    win_rate_stats: WinRateStats,
    periods_per_year: int = PERIODS_PER_YEAR,
) -> Metrics:
    """
    Calcula todas las métricas de una vez y las redondea para presentación.

    Args:
        log_returns: Log-retornos por paso de la cartera (ya con costes)
        win_rate_stats: Contadores de trades del mismo backtest
        periods_per_year: Barras por año para anualizar (252 = diario)

    Returns:
        Metrics inmutable (solo se construye si todo el cálculo tuvo éxito)

    Raises:
        PreconditionError: si la serie está vacía
    """
    arr = _as_array(log_returns)
    if arr.size == 0:
        raise PreconditionError("evaluate necesita al menos un log-retorno.")

    curve = equity_curve(arr)
    drawdowns = calculate_drawdowns(curve)
    mean_return = calculate_mean_return(arr)

    p = PRECISION
    return Metrics(
        annualized_return=round_float(
            calculate_annualized_return(mean_return, periods_per_year), p["annualized_return"]
        ),
        drawdown_series=tuple(round_float(x, p["drawdown_series"]) for x in drawdowns),
        equity_curve=tuple(round_float(x, p["equity_curve"]) for x in curve),
        max_drawdown=round_float(drawdowns.min(), p["max_drawdown"]),
        mean_return=round_float(mean_return, p["mean_return"]),
        sharpe_ratio=round_float(calculate_sharpe(arr), p["sharpe_ratio"]),
        sortino_ratio=round_float(calculate_sortino(arr), p["sortino_ratio"]),
        total_return=round_float(curve[-1], p["total_return"]),
        win_rate_stats=win_rate_stats,
    )
