"""Common types for threshold triggers and signals."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from core.errors import ConfigError
from core.types import Direction

# Trigger pulse values (not positions)
OPEN = 1.0
CLOSE = -1.0
NONE = 0.0

Threshold = Optional[float]
ThresholdPair = tuple[Threshold, Threshold]  # (open, close)

_EMPTY_PAIR: ThresholdPair = (None, None)


class Comparator(str, Enum):
    """Comparator kinds, declared in evaluation priority order."""

    EQ = "eq"
    NEQ = "neq"
    GT = "gt"  # inclusive (>=)
    LT = "lt"  # inclusive (<=)

    def matches(self, value: float, threshold: float) -> bool:
        if self is Comparator.EQ:
            return value == threshold
        if self is Comparator.NEQ:
            return value != threshold
        if self is Comparator.GT:
            return value >= threshold
        return value <= threshold


class TriggerSide(str, Enum):
    OPEN = "open"
    CLOSE = "close"

    @property
    def pulse(self) -> float:
        return OPEN if self is TriggerSide.OPEN else CLOSE


@dataclass(frozen=True)
class Rule:
    comparator: Comparator
    side: TriggerSide
    threshold: float


def _parse_pair(name: str, raw: Any) -> ThresholdPair:
    if raw is None:
        return _EMPTY_PAIR
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence) or len(raw) != 2:
        raise ConfigError(f"'{name}' debe ser un par [open, close]; recibido {raw!r}")
    out: list[Threshold] = []
    for v in raw:
        if v is None:
            out.append(None)
            continue
        if isinstance(v, bool):
            raise ConfigError(f"'{name}' contiene un booleano: {raw!r}")
        try:
            out.append(float(v))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"'{name}' contiene un valor no numérico: {raw!r}") from e
    return out[0], out[1]


@dataclass(frozen=True)
class ThresholdSpec:
    """
    Bundle of four optional (open, close) threshold pairs plus a direction.

    The wire format mirrors the field names:
        {"eq": [open, close], "neq": [...], "gt": [...], "lt": [...],
         "signal_type": "Long" | "Short"}
    with null for unset thresholds.
    """

    eq: ThresholdPair = _EMPTY_PAIR
    neq: ThresholdPair = _EMPTY_PAIR
    gt: ThresholdPair = _EMPTY_PAIR
    lt: ThresholdPair = _EMPTY_PAIR
    direction: Direction = Direction.LONG
    _rules: tuple[Rule, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # pares como tupla de floats y dirección como enum, vengan como vengan
        for comp in Comparator:
            object.__setattr__(
                self, comp.value, _parse_pair(comp.value, getattr(self, comp.value))
            )
        object.__setattr__(self, "direction", Direction.parse(self.direction))

        rules: list[Rule] = []
        for side, idx in ((TriggerSide.OPEN, 0), (TriggerSide.CLOSE, 1)):
            for comp in Comparator:
                threshold = getattr(self, comp.value)[idx]
                if threshold is not None:
                    rules.append(Rule(comp, side, float(threshold)))
        object.__setattr__(self, "_rules", tuple(rules))

    def rules(self) -> tuple[Rule, ...]:
        """Ordered rule table: open rules (eq, neq, gt, lt), then close rules."""
        return self._rules

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThresholdSpec:
        if not isinstance(data, Mapping):
            raise ConfigError(f"Threshold spec debe ser un dict; recibido {type(data).__name__}")
        return cls(
            eq=_parse_pair("eq", data.get("eq")),
            neq=_parse_pair("neq", data.get("neq")),
            gt=_parse_pair("gt", data.get("gt")),
            lt=_parse_pair("lt", data.get("lt")),
            direction=Direction.parse(data.get("signal_type", Direction.LONG)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "eq": list(self.eq),
            "neq": list(self.neq),
            "gt": list(self.gt),
            "lt": list(self.lt),
            "signal_type": self.direction.value,
        }
