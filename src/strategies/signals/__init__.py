"""Threshold triggers, position signals and consolidation."""

from strategies.signals.consolidator import consolidate_signals
from strategies.signals.generator import PositionState, generate_signals, transition
from strategies.signals.triggers import evaluate_triggers, evaluate_value
from strategies.signals.types import (
    CLOSE,
    NONE,
    OPEN,
    Comparator,
    Rule,
    ThresholdSpec,
    TriggerSide,
)

__all__ = [
    "OPEN",
    "CLOSE",
    "NONE",
    "Comparator",
    "TriggerSide",
    "Rule",
    "ThresholdSpec",
    "evaluate_value",
    "evaluate_triggers",
    "PositionState",
    "transition",
    "generate_signals",
    "consolidate_signals",
]
