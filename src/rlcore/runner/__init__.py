"""Training and evaluation drivers.

The driver is a plain Python loop around ``agent.train``: agents own
their interaction loop, the driver owns iteration budgets, logging,
metrics files and periodic greedy evaluation.
"""

from rlcore.runner.config import RunnerConfig
from rlcore.runner.evaluator import EpisodeTracker, EvalMetrics, evaluate
from rlcore.runner.trainer import TrainResult, train

__all__ = [
    "EpisodeTracker",
    "EvalMetrics",
    "RunnerConfig",
    "TrainResult",
    "evaluate",
    "train",
]
