# src/report/serialize.py

"""
serialize.py: conversión de resultados del backtest a tipos nativos de JSON.

API expuesta (usada por tools/run_pairs_backtest.py y optimize.grid):
- to_dict(obj) -> Any
- metrics_to_dict(metrics) -> dict
- metrics_to_json(metrics, indent=2) -> str
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from enum import Enum
import json
from typing import Any

import numpy as np

from core.types import Metrics


def to_dict(obj: Any) -> Any:
    """Convierte np/dataclasses/enums a tipos nativos compatibles con JSON."""
    if obj is None or isinstance(obj, (str, bool, int)):
        return obj
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (float, np.floating)):
        return float(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.ndarray):
        return [to_dict(x) for x in obj.tolist()]
    if isinstance(obj, (list, tuple)):
        return [to_dict(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): to_dict(v) for k, v in obj.items()}
    if is_dataclass(obj) and not isinstance(obj, type):
        return {k: to_dict(v) for k, v in asdict(obj).items()}
    raise TypeError(f"Tipo no serializable: {type(obj).__name__}")


def metrics_to_dict(metrics: Metrics) -> dict[str, Any]:
    """Metrics -> dict con los nombres de campo del contrato externo."""
    if not isinstance(metrics, Metrics):
        raise TypeError(f"Se esperaba Metrics; recibido {type(metrics).__name__}")
    return to_dict(metrics)


def metrics_to_json(metrics: Metrics, indent: int | None = 2) -> str:
    return json.dumps(metrics_to_dict(metrics), indent=indent, ensure_ascii=False)
