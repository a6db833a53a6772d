from rlcore.algorithms.reinforce.agent import ReinforceAgent
from rlcore.algorithms.reinforce.config import ReinforceConfig

__all__ = ["ReinforceAgent", "ReinforceConfig"]
