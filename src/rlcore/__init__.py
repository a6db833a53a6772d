"""Reinforcement learning agents over async networks, with JAX."""

from rlcore.agent import (
    Agent,
    PolicyGradientAgent,
    ProbabilisticAgent,
    ProbabilisticAgentMode,
)
from rlcore.dataprotocol import ReplayBuffer, Trajectory, TrajectoryStep
from rlcore.env import Environment, InvalidActionError, make
from rlcore.metrics import MetricsLogger, setup_logging
from rlcore.seeding import make_key, make_rng, set_seed, split_keys
from rlcore.types import Step, StepKind
from rlcore.values import (
    EmpiricalAdvantageEstimation,
    GeneralizedAdvantageEstimation,
    discounted_returns,
)

__all__ = [
    "Agent",
    "EmpiricalAdvantageEstimation",
    "Environment",
    "GeneralizedAdvantageEstimation",
    "InvalidActionError",
    "MetricsLogger",
    "PolicyGradientAgent",
    "ProbabilisticAgent",
    "ProbabilisticAgentMode",
    "ReplayBuffer",
    "Step",
    "StepKind",
    "Trajectory",
    "TrajectoryStep",
    "discounted_returns",
    "make",
    "make_key",
    "make_rng",
    "set_seed",
    "setup_logging",
    "split_keys",
]
