"""Canonical impact result model."""

import math
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ImpactResult:
    """
    Impact of one observation in canonical units.

    Attributes:
        e: Energy used during the observation, in kWh
        m: Embodied (manufacture) emissions, in gCO2eq
    """
    e: float
    m: float

    def __post_init__(self):
        """Validation after initialization."""
        if not math.isfinite(self.e) or self.e < 0:
            raise ValueError(f"Energy must be a finite non-negative number, got {self.e}")
        if not math.isfinite(self.m) or self.m < 0:
            raise ValueError(f"Embodied emissions must be a finite non-negative number, got {self.m}")

    def to_dict(self) -> Dict[str, float]:
        return {"e": self.e, "m": self.m}
