from rlcore.algorithms.dqn.agent import DQNAgent
from rlcore.algorithms.dqn.config import DQNConfig

__all__ = ["DQNAgent", "DQNConfig"]
