"""Greedy policy evaluation.

Runs a :class:`ProbabilisticAgent` greedily for a number of episodes and
aggregates their returns. The agent's recurrent state is restored
afterwards so evaluation does not disturb training.

Usage::

    eval_metrics = await evaluate(agent, env, n_episodes=10, max_steps=200)
    # eval_metrics.mean_return, eval_metrics.std_return, eval_metrics.mean_length
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from rlcore.agent.probabilistic import ProbabilisticAgent, ProbabilisticAgentMode
from rlcore.dataprotocol.trajectory import Trajectory
from rlcore.env.base import Environment
from rlcore.types import StepKind


class EvalMetrics(NamedTuple):
    """Aggregated evaluation results."""

    mean_return: float
    std_return: float
    mean_length: float


class EpisodeTracker:
    """Step callback accumulating per-episode returns and lengths.

    Completed episodes are appended to ``returns`` / ``lengths``; the
    running episode is kept in ``current_return`` / ``current_length``.
    """

    def __init__(self) -> None:
        self.returns: list[float] = []
        self.lengths: list[int] = []
        self.current_return = 0.0
        self.current_length = 0

    def __call__(self, environment: Environment, trajectory: Trajectory) -> None:
        step = trajectory.current_step
        self.current_return += float(step.reward)
        self.current_length += 1
        if step.step_kind == StepKind.LAST:
            self.returns.append(self.current_return)
            self.lengths.append(self.current_length)
            self.current_return = 0.0
            self.current_length = 0

    def reset_episode(self) -> None:
        self.current_return = 0.0
        self.current_length = 0


async def evaluate(
    agent: ProbabilisticAgent,
    environment: Environment,
    *,
    n_episodes: int,
    max_steps: int,
) -> EvalMetrics:
    """Run *n_episodes* greedy episodes of at most *max_steps* steps each.

    An episode cut off by *max_steps* counts with the return accumulated
    so far.
    """
    saved_state = agent.state
    tracker = EpisodeTracker()
    try:
        for _ in range(n_episodes):
            environment.reset()
            tracker.reset_episode()
            await agent.run(
                environment,
                ProbabilisticAgentMode.GREEDY,
                max_steps=max_steps,
                max_episodes=1,
                callbacks=[tracker],
            )
            if tracker.current_length > 0:
                tracker.returns.append(tracker.current_return)
                tracker.lengths.append(tracker.current_length)
    finally:
        agent.state = saved_state

    returns = np.asarray(tracker.returns, dtype=np.float32)
    lengths = np.asarray(tracker.lengths, dtype=np.float32)
    if returns.size == 0:
        return EvalMetrics(mean_return=0.0, std_return=0.0, mean_length=0.0)
    return EvalMetrics(
        mean_return=float(returns.mean()),
        std_return=float(returns.std()),
        mean_length=float(lengths.mean()),
    )
