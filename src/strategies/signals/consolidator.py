"""Merge several signal streams into one net position stream."""

from __future__ import annotations

from collections.abc import Sequence

from core.errors import PreconditionError
from core.types import ConsolidatedSignal


def _sign(x: float) -> float:
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return 0.0


def consolidate_signals(streams: Sequence[Sequence[float]]) -> ConsolidatedSignal:
    """
    First-nonzero-wins per index, scanning ``streams`` in list order.

    Args:
        streams: Signal streams of equal length (earlier entries take precedence)

    Returns:
        ConsolidatedSignal with values in {-1, 0, +1}

    Raises:
        PreconditionError: empty list or streams of different lengths
    """
    if len(streams) == 0:
        raise PreconditionError("consolidate_signals necesita al menos una serie de señales.")
    n = len(streams[0])
    for k, s in enumerate(streams):
        if len(s) != n:
            raise PreconditionError(
                f"Las series de señales difieren en longitud (serie {k}: {len(s)} != {n})."
            )

    net: list[float] = []
    for i in range(n):
        value = 0.0
        for s in streams:
            if s[i] != 0:
                value = _sign(s[i])
                break
        net.append(value)
    return ConsolidatedSignal(tuple(net))
