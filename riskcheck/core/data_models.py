"""Pydantic data models for the risk register.

Defines the risk event record, the risk level classification and the
analysis snapshot returned by the aggregator.
"""

import math

from pydantic import BaseModel, Field, ConfigDict
from typing import List
from enum import Enum
from uuid import UUID, uuid4


class RiskLevel(str, Enum):
    """Coarse risk level derived from the coefficient of variation."""

    LOW = "Low Risk"
    MEDIUM = "Medium Risk"
    HIGH = "High Risk"


class RiskEvent(BaseModel):
    """Single risk event in the register.

    The stored ``probability`` is kept raw; computations always go through
    ``validated_probability``, which is clamped to [0, 1]. Losses and
    probabilities must be finite numbers.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: UUID = Field(default_factory=uuid4, description="Unique event identifier")
    description: str = Field(..., description="Free-text label")
    possible_loss: float = Field(..., description="Potential monetary loss")
    probability: float = Field(..., description="Occurrence probability (raw)")

    @property
    def validated_probability(self) -> float:
        """Probability clamped to the closed interval [0, 1]."""
        if math.isnan(self.probability):
            return 0.0
        return min(max(self.probability, 0.0), 1.0)

    def with_probability(self, probability: float) -> "RiskEvent":
        """Return a copy of this event carrying a new stored probability."""
        return self.model_copy(update={"probability": probability})


class RiskAnalysis(BaseModel):
    """Read-only snapshot of the register statistics."""

    model_config = ConfigDict(frozen=True)

    total_risk_events: int = Field(..., ge=0, description="Number of events")
    average_loss: float = Field(..., description="Expected loss")
    standard_deviation: float = Field(..., description="Standard deviation of loss")
    integral_risk: float = Field(..., description="Expected loss plus RMS loss")
    risk_level: RiskLevel = Field(..., description="Coarse risk level")
    coefficient_of_variation: float = Field(
        ..., description="Standard deviation divided by expected loss"
    )


DEFAULT_EVENTS = [
    ("Equipment failure", 50000.0, 0.15),
    ("Data breach", 100000.0, 0.1),
    ("Natural disaster", 200000.0, 0.05),
    ("Employee injury", 75000.0, 0.08),
    ("Supply chain disruption", 80000.0, 0.12),
    ("Everything will be fine", 0.0, 0.5),
]


def default_events() -> List[RiskEvent]:
    """Build fresh copies of the example events a new register starts with."""
    return [
        RiskEvent(description=description, possible_loss=loss, probability=probability)
        for description, loss, probability in DEFAULT_EVENTS
    ]
