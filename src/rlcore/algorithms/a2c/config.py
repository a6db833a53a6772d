"""A2C hyperparameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from rlcore.values import (
    AdvantageFunction,
    EmpiricalAdvantageEstimation,
    GeneralizedAdvantageEstimation,
)


@dataclass(frozen=True)
class A2CConfig:
    """All A2C hyperparameters in one place.

    Optimiser settings live with the network (see ``NetworkConfig``).
    """

    # Advantage estimation
    advantage_function: Literal["empirical", "gae"] = "empirical"
    discount_factor: float = 0.9
    discount_weight: float = 0.95  # GAE lambda, unused by "empirical"
    normalize_advantages: bool = True

    # Loss weights
    value_estimation_loss_weight: float = 0.2
    entropy_regularization_weight: float = 0.0

    def make_advantage_function(self) -> AdvantageFunction:
        """Build the advantage estimator selected by ``advantage_function``."""
        if self.advantage_function == "empirical":
            return EmpiricalAdvantageEstimation(self.discount_factor)
        if self.advantage_function == "gae":
            return GeneralizedAdvantageEstimation(self.discount_factor, self.discount_weight)
        raise ValueError(f"Unknown advantage function: {self.advantage_function!r}")
