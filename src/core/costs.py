# src/core/costs.py
from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from core.errors import PreconditionError

"""
Costes de trading a partir de las transiciones de la señal neta.

Responsabilidad
---------------
- Detectar transiciones entre pasos consecutivos (apertura, cierre, giro).
- Generar la serie de costes (log-retorno negativo) alineada con la señal.

API pública
-----------
- Transition / classify_transition : detección compartida con el cálculo
  de win rate (core.backtest), para que costes y contadores vean los mismos
  eventos.
- trade_costs : serie de costes por paso.

Notas
-----
- Funciones puras y deterministas (sin efectos secundarios).
- La serie de costes se SOBREESCRIBE por índice, nunca se acumula: si dos
  transiciones consecutivas reclaman el mismo índice gana la última.
"""


class Transition(Enum):
    NONE = "none"
    OPEN = "open"
    CLOSE = "close"
    REVERSAL = "reversal"  # cierre + apertura en el mismo paso


def classify_transition(prev_val: float, val: float) -> Transition:
    """Clasifica el paso (i-1 -> i) de la señal."""
    if val == 0 and prev_val != 0:
        return Transition.CLOSE
    if val != 0 and prev_val == 0:
        return Transition.OPEN
    if val != 0 and prev_val != 0 and val != prev_val:
        return Transition.REVERSAL
    return Transition.NONE


def _ensure_cost_rate(cost_rate: float) -> float:
    rate = float(cost_rate)
    if rate < 0:
        raise PreconditionError("cost_rate no puede ser negativo.")
    return rate


def trade_costs(signals: Sequence[float], cost_rate: float) -> list[float]:
    """
    Devuelve los costes en la secuencia correcta según la señal.

    - cierre  (s[i] == 0, s[i-1] != 0): -cost_rate en i-1
    - apertura (s[i] != 0, s[i-1] == 0): -cost_rate en i
    - giro    (ambos != 0 y distintos): -cost_rate en i-1 y en i
    """
    rate = _ensure_cost_rate(cost_rate)
    costs = [0.0] * len(signals)
    for i in range(1, len(signals)):
        kind = classify_transition(signals[i - 1], signals[i])
        if kind is Transition.CLOSE:
            costs[i - 1] = -rate
        elif kind is Transition.OPEN:
            costs[i] = -rate
        elif kind is Transition.REVERSAL:
            costs[i - 1] = -rate
            costs[i] = -rate
    return costs
