"""AssignmentWeights value object — the caller-supplied scoring weights."""

from __future__ import annotations

import math
from dataclasses import dataclass

from shuttle.domain.errors import WeightsValidationError

MIN_WEIGHT = 0.0
MAX_WEIGHT = 100.0


def _check_weight(name: str, value: object) -> float:
    # bool is an int subclass but never a meaningful weight
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise WeightsValidationError(name, value, "must be a number")
    if not math.isfinite(value):
        raise WeightsValidationError(name, value, "must be finite")
    if not MIN_WEIGHT <= value <= MAX_WEIGHT:
        raise WeightsValidationError(
            name, value, f"must be within [{MIN_WEIGHT:g}, {MAX_WEIGHT:g}]"
        )
    return float(value)


@dataclass(frozen=True)
class AssignmentWeights:
    proximity_weight: float
    capacity_weight: float
    shift_weight: float

    def __post_init__(self) -> None:
        for name in ("proximity_weight", "capacity_weight", "shift_weight"):
            object.__setattr__(self, name, _check_weight(name, getattr(self, name)))
