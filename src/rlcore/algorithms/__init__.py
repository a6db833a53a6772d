from rlcore.algorithms.a2c import A2CAgent, A2CConfig
from rlcore.algorithms.dqn import DQNAgent, DQNConfig
from rlcore.algorithms.reinforce import ReinforceAgent, ReinforceConfig

__all__ = [
    "A2CAgent",
    "A2CConfig",
    "DQNAgent",
    "DQNConfig",
    "ReinforceAgent",
    "ReinforceConfig",
]
