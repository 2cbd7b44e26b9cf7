# src/strategies/__init__.py
"""
Estrategias por umbrales.

- signals: triggers por umbral, histéresis de posición y consolidación
  de varias series (p. ej. long + short) en una señal neta.
"""

from __future__ import annotations

from strategies.signals import (
    ThresholdSpec,
    consolidate_signals,
    evaluate_triggers,
    generate_signals,
)

__all__ = [
    "ThresholdSpec",
    "evaluate_triggers",
    "generate_signals",
    "consolidate_signals",
]
