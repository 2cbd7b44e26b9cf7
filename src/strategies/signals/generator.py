"""Position hysteresis: trigger pulses -> held position per step."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from core.types import Direction
from strategies.signals.types import CLOSE, OPEN


class PositionState(Enum):
    FLAT = "flat"
    IN_POSITION = "in_position"


def transition(state: PositionState, prev_trigger: float) -> PositionState:
    """
    Next state given the trigger observed on the PREVIOUS step.

    A position is never taken on the same bar that produced its trigger.

        FLAT        + open        -> IN_POSITION
        FLAT        + none/close  -> FLAT
        IN_POSITION + close       -> FLAT
        IN_POSITION + open/none   -> IN_POSITION
    """
    if state is PositionState.FLAT:
        return PositionState.IN_POSITION if prev_trigger == OPEN else PositionState.FLAT
    return PositionState.FLAT if prev_trigger == CLOSE else PositionState.IN_POSITION


def generate_signals(triggers: Sequence[float], direction: Direction | str) -> list[float]:
    """
    Apply hysteresis to a trigger stream.

    Args:
        triggers: Pulses in {+1, -1, 0}
        direction: LONG (+1 factor) or SHORT (-1 factor)

    Returns:
        Position per step in {factor, 0.0}; first element is always 0.0
    """
    factor = Direction.parse(direction).factor
    if len(triggers) == 0:
        return []

    state = PositionState.FLAT
    signals = [0.0]
    for i in range(1, len(triggers)):
        state = transition(state, triggers[i - 1])
        signals.append(factor if state is PositionState.IN_POSITION else 0.0)
    return signals
