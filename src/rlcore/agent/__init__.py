from rlcore.agent.base import Agent, StepCallback
from rlcore.agent.policy_gradient import PolicyGradientAgent
from rlcore.agent.probabilistic import ModeKind, ProbabilisticAgent, ProbabilisticAgentMode

__all__ = [
    "Agent",
    "ModeKind",
    "PolicyGradientAgent",
    "ProbabilisticAgent",
    "ProbabilisticAgentMode",
    "StepCallback",
]
