# src/core/backtest.py
"""
Backtest vectorizado de una señal neta sobre uno o dos activos (pairs trade).

Flujo:
    cfg = BacktestConfig(cost_rate=0.001, weight_asset_1=1.0, weight_asset_2=1.0)
    bt = cfg.with_signal(consolidated)          # Backtest configurado
    port = bt.run(log_rets_1, log_rets_2)       # log-retornos de cartera
    metrics = bt.run_backtest(log_rets_1, log_rets_2)

Estados:
- `BacktestConfig` no lleva señal ni tiene run(); `with_signal()` es la única
  forma de obtener un `Backtest`.
- `Backtest` solo existe con una ConsolidatedSignal ya calculada.

Convenciones de signo:
- Activo 1: r1 * señal * (+1) * peso_1
- Activo 2: r2 * señal * (-1) * peso_2  (la misma señal que es "largo 1" es
  "corto 2" en un pairs trade)
- Costes: una sola vez por paso, derivados de las transiciones de la señal.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math

from loguru import logger
import numpy as np

from core.costs import Transition, classify_transition, trade_costs
from core.errors import PreconditionError, ensure_same_length
from core.metrics.performance import PERIODS_PER_YEAR, PRECISION, evaluate, round_float
from core.types import ConsolidatedSignal, Metrics, WinRateStats

ASSET_1_SIGN = 1.0
ASSET_2_SIGN = -1.0


def _ensure_finite(value: float, name: str) -> float:
    v = float(value)
    if not math.isfinite(v):
        raise PreconditionError(f"{name} debe ser un número finito (recibido {value!r}).")
    return v


def compute_win_rate_stats(
    signal: Sequence[float], log_returns: Sequence[float]
) -> WinRateStats:
    """
    Reproduce las mismas transiciones que los costes, contando ciclos de trade.

    - cierre: closed += 1 y closed_profit += 1 si el acumulado del trade es > 0
    - apertura: opened += 1 y el acumulado arranca con el retorno del paso
    - giro: cierre + apertura en el mismo paso
    - sin transición con posición abierta: se acumula el retorno del paso
    """
    ensure_same_length("signal", len(signal), "log_returns", len(log_returns))

    opened = 0
    closed = 0
    closed_profit = 0
    curr_profit = 0.0
    is_open = False

    for i in range(1, len(signal)):
        kind = classify_transition(signal[i - 1], signal[i])
        if kind in (Transition.CLOSE, Transition.REVERSAL):
            closed += 1
            if curr_profit > 0.0:
                closed_profit += 1
            curr_profit = 0.0
            is_open = False
        if kind in (Transition.OPEN, Transition.REVERSAL):
            opened += 1
            curr_profit = float(log_returns[i])
            is_open = True
        elif kind is Transition.NONE and is_open:
            curr_profit += float(log_returns[i])

    win_rate = closed_profit / closed if closed > 0 else 0.0
    return WinRateStats(
        win_rate=round_float(win_rate, PRECISION["win_rate"]),
        opened=opened,
        closed=closed,
        closed_profit=closed_profit,
    )


@dataclass(frozen=True)
class BacktestConfig:
    """
    Parámetros del backtest sin señal (estado "no configurado").

    Args:
        cost_rate: Coste por transición expresado como log-retorno (0.001 = 10 bps)
        weight_asset_1: Fracción de capital en el activo 1
        weight_asset_2: Fracción de capital en el activo 2 (solo pairs)
        periods_per_year: Barras por año para anualizar
    """

    cost_rate: float = 0.001
    weight_asset_1: float = 1.0
    weight_asset_2: float = 1.0
    periods_per_year: int = PERIODS_PER_YEAR

    def __post_init__(self) -> None:
        cost = _ensure_finite(self.cost_rate, "cost_rate")
        if cost < 0:
            raise PreconditionError("cost_rate no puede ser negativo.")
        _ensure_finite(self.weight_asset_1, "weight_asset_1")
        _ensure_finite(self.weight_asset_2, "weight_asset_2")
        if int(self.periods_per_year) <= 0:
            raise PreconditionError("periods_per_year debe ser > 0.")

    def with_signal(self, signal: ConsolidatedSignal | Sequence[float]) -> Backtest:
        """Fija la señal neta y devuelve el backtest configurado."""
        if signal is None:
            raise PreconditionError("No hay señal consolidada: no se puede configurar el backtest.")
        if not isinstance(signal, ConsolidatedSignal):
            signal = ConsolidatedSignal.of(signal)
        return Backtest(config=self, signal=signal)


@dataclass(frozen=True)
class Backtest:
    """Backtest configurado: siempre tiene una ConsolidatedSignal."""

    config: BacktestConfig
    signal: ConsolidatedSignal

    def __post_init__(self) -> None:
        if self.signal is None or not isinstance(self.signal, ConsolidatedSignal):
            raise PreconditionError("Backtest requiere una ConsolidatedSignal.")

    def trade_costs(self) -> list[float]:
        """Costes por paso en la secuencia correcta según la señal."""
        return trade_costs(self.signal.values, self.config.cost_rate)

    def _asset_returns(
        self, log_returns: Sequence[float], sign: float, weight: float, name: str
    ) -> np.ndarray:
        ensure_same_length(name, len(log_returns), "signal", len(self.signal))
        rets = np.asarray(log_returns, dtype=float)
        sig = np.asarray(self.signal.values, dtype=float)
        return rets * sig * sign * weight

    def run(
        self,
        log_returns_1: Sequence[float],
        log_returns_2: Sequence[float] | None = None,
    ) -> list[float]:
        """
        Log-retornos de cartera por paso (activo 1 + activo 2 opcional + costes).

        Raises:
            PreconditionError: si alguna serie de retornos no mide lo mismo que la señal
        """
        strat = self._asset_returns(
            log_returns_1, ASSET_1_SIGN, self.config.weight_asset_1, "log_returns_1"
        )
        if log_returns_2 is not None:
            strat = strat + self._asset_returns(
                log_returns_2, ASSET_2_SIGN, self.config.weight_asset_2, "log_returns_2"
            )
        costs = np.asarray(self.trade_costs(), dtype=float)
        portfolio = strat + costs
        logger.debug(
            f"Backtest: {len(portfolio)} pasos | modo={'pairs' if log_returns_2 is not None else 'single'}"
            f" | pasos con coste={int(np.count_nonzero(costs))}"
        )
        return portfolio.tolist()

    def win_rate_stats(self, portfolio_log_returns: Sequence[float]) -> WinRateStats:
        return compute_win_rate_stats(self.signal.values, portfolio_log_returns)

    def run_backtest(
        self,
        log_returns_1: Sequence[float],
        log_returns_2: Sequence[float] | None = None,
    ) -> Metrics:
        """Ejecuta el backtest completo y devuelve las métricas (todo o nada)."""
        portfolio = self.run(log_returns_1, log_returns_2)
        stats = self.win_rate_stats(portfolio)
        logger.debug(
            f"Trades: abiertos={stats.opened} cerrados={stats.closed} "
            f"ganadores={stats.closed_profit} win_rate={stats.win_rate}"
        )
        return evaluate(portfolio, stats, periods_per_year=self.config.periods_per_year)
