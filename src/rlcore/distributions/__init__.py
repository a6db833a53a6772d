from rlcore.distributions.base import DiscreteDistribution, Distribution
from rlcore.distributions.categorical import (
    Categorical,
    exp_weighted_entropy,
    shannon_entropy,
)
from rlcore.distributions.uniform import Uniform

__all__ = [
    "Categorical",
    "DiscreteDistribution",
    "Distribution",
    "Uniform",
    "exp_weighted_entropy",
    "shannon_entropy",
]
