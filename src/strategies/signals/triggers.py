"""Threshold trigger evaluation: numeric series -> open/close/none pulses."""

from __future__ import annotations

from collections.abc import Iterable

from strategies.signals.types import NONE, Rule, ThresholdSpec


def evaluate_value(value: float, rules: tuple[Rule, ...]) -> float:
    """
    Return the pulse of the first rule matching ``value``.

    ``rules`` is already ordered (open before close, eq -> neq -> gt -> lt),
    so at most one pulse is produced and open always wins over close.
    """
    for rule in rules:
        if rule.comparator.matches(value, rule.threshold):
            return rule.side.pulse
    return NONE


def evaluate_triggers(series: Iterable[float], spec: ThresholdSpec) -> list[float]:
    """
    Map a numeric series to a trigger stream in {+1 (open), -1 (close), 0}.

    Args:
        series: Input values (e.g. a rolling z-score)
        spec: Threshold bundle; unset thresholds never fire

    Returns:
        Trigger list with the same length as ``series`` (empty in, empty out)
    """
    rules = spec.rules()
    return [evaluate_value(float(x), rules) for x in series]
