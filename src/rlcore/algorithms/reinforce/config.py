"""REINFORCE hyperparameters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReinforceConfig:
    """All REINFORCE hyperparameters in one place.

    Optimiser settings live with the network (see ``NetworkConfig``).
    """

    discount_factor: float = 0.9

    # Standardise returns over the trajectory before weighting log-probs.
    normalize_returns: bool = True

    entropy_regularization_weight: float = 0.0
