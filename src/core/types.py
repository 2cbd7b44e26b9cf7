# src/core/types.py
"""
Tipos y estructuras comunes del pipeline de backtest.
Todo es inmutable: cada etapa produce un valor nuevo a partir del anterior.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum

from core.errors import ConfigError

# ------------------------------ Enums -------------------------------------


class Direction(str, Enum):
    """Dirección de una serie de señales (valor = formato de cable)."""

    LONG = "Long"
    SHORT = "Short"

    @property
    def factor(self) -> float:
        return 1.0 if self is Direction.LONG else -1.0

    @classmethod
    def parse(cls, value: str | Direction) -> Direction:
        """Acepta 'Long'/'LONG'/'long' (y lo mismo para Short)."""
        if isinstance(value, Direction):
            return value
        s = str(value).strip().lower()
        for d in cls:
            if d.value.lower() == s:
                return d
        raise ConfigError(f"signal_type desconocido: {value!r} (usa 'Long' o 'Short').")


# ------------------------------ Dataclasses -------------------------------


@dataclass(frozen=True)
class ConsolidatedSignal:
    """
    Posición neta por paso en {-1, 0, +1}.

    Solo se construye desde `consolidate_signals` (o a mano en tests); su
    existencia es lo que habilita un `Backtest` configurado.
    """

    values: tuple[float, ...]

    @classmethod
    def of(cls, values: Sequence[float]) -> ConsolidatedSignal:
        return cls(tuple(float(v) for v in values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __getitem__(self, idx: int) -> float:
        return self.values[idx]

    def sliced(self, start: int) -> ConsolidatedSignal:
        return ConsolidatedSignal(self.values[start:])


@dataclass(frozen=True)
class WinRateStats:
    """Contadores agregados de ciclos de trade (no registros por trade)."""

    win_rate: float
    opened: int
    closed: int
    closed_profit: int


@dataclass(frozen=True)
class Metrics:
    """
    Resultado final de la evaluación, ya redondeado para presentación.

    Los nombres de campo forman parte del contrato externo cuando se
    serializa (ver report.serialize.metrics_to_dict).
    """

    annualized_return: float
    drawdown_series: tuple[float, ...]
    equity_curve: tuple[float, ...]
    max_drawdown: float
    mean_return: float
    sharpe_ratio: float
    sortino_ratio: float
    total_return: float
    win_rate_stats: WinRateStats
