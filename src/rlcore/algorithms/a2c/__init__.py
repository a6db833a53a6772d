from rlcore.algorithms.a2c.agent import A2CAgent
from rlcore.algorithms.a2c.config import A2CConfig

__all__ = ["A2CAgent", "A2CConfig"]
