"""Outer training loop shared by all agents.

A Python ``for`` over iterations: the environment is reset once, then
each iteration lets the agent collect and train through
``agent.train(...)`` from wherever the previous one stopped, so episodes
span iterations. Logging and evaluation run in between.

Usage::

    from rlcore.algorithms.reinforce import ReinforceAgent
    from rlcore.env import make
    from rlcore.runner import RunnerConfig, train

    env = make("GridWorld-v0", size=4)
    agent = ReinforceAgent(env, network)
    result = asyncio.run(train(agent, env, RunnerConfig(iterations=200)))
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from pathlib import Path
from typing import Any, NamedTuple

import numpy as np

from rlcore.agent.base import Agent, StepCallback
from rlcore.agent.probabilistic import ProbabilisticAgent
from rlcore.env.base import Environment
from rlcore.metrics import MetricsLogger, log_iteration_progress
from rlcore.runner.config import RunnerConfig
from rlcore.runner.evaluator import EpisodeTracker, EvalMetrics, evaluate
from rlcore.seeding import set_seed

logger = logging.getLogger(__name__)

IterationCallback = Callable[[int, Agent, dict[str, Any]], None]


class TrainResult(NamedTuple):
    """Return value from ``train``."""

    agent: Agent
    episode_returns: list[float]
    metrics_log: list[dict[str, Any]]
    eval_history: list[EvalMetrics]


async def train(
    agent: Agent,
    environment: Environment,
    config: RunnerConfig,
    *,
    callbacks: tuple[StepCallback, ...] = (),
    iteration_callback: IterationCallback | None = None,
    eval_environment: Environment | None = None,
) -> TrainResult:
    """Train *agent* for ``config.iterations`` iterations.

    Args:
        agent: Any agent; evaluation additionally needs a
            :class:`ProbabilisticAgent`.
        environment: Training environment.
        config: Outer-loop settings.
        callbacks: Extra step callbacks forwarded to ``agent.train``.
        iteration_callback: ``(iteration, agent, record)`` called every
            ``config.log_interval`` iterations.
        eval_environment: Environment for evaluation; defaults to
            *environment*, which is then reset before training resumes.

    Returns:
        ``TrainResult`` with the agent, the returns of every completed
        training episode, the logged records and the evaluation history.
    """
    set_seed(config.seed)
    max_steps = math.inf if config.max_steps is None else config.max_steps
    max_episodes = math.inf if config.max_episodes is None else config.max_episodes
    if math.isinf(max_steps) and math.isinf(max_episodes):
        raise ValueError("RunnerConfig needs max_steps or max_episodes to bound an iteration")

    tracker = EpisodeTracker()
    step_callbacks = (tracker, *callbacks)
    eval_environment = eval_environment or environment
    metrics_file = (
        MetricsLogger(Path(config.log_dir) / "metrics.jsonl") if config.log_dir else None
    )
    metrics_log: list[dict[str, Any]] = []
    eval_history: list[EvalMetrics] = []
    losses: list[float] = []

    logger.info(
        "Training %s on %s for %d iterations",
        type(agent).__name__,
        environment.name,
        config.iterations,
    )
    environment.reset()
    try:
        for iteration in range(1, config.iterations + 1):
            loss = await agent.train(
                environment,
                max_steps=max_steps,
                max_episodes=max_episodes,
                callbacks=step_callbacks,
            )
            losses.append(float(loss))

            if iteration % config.log_interval == 0:
                recent = tracker.returns[-config.log_interval:]
                record: dict[str, Any] = {
                    "iteration": iteration,
                    "loss": float(np.mean(losses)),
                    "episodes": len(tracker.returns),
                }
                if recent:
                    record["episode_return"] = float(np.mean(recent))
                losses.clear()
                metrics_log.append(record)
                log_iteration_progress(iteration, config.iterations, record)
                if metrics_file is not None:
                    metrics_file.write(record)
                if iteration_callback is not None:
                    iteration_callback(iteration, agent, record)

            if config.eval_every > 0 and iteration % config.eval_every == 0:
                if not isinstance(agent, ProbabilisticAgent):
                    raise TypeError(f"Cannot evaluate {type(agent).__name__}: not probabilistic")
                eval_metrics = await evaluate(
                    agent,
                    eval_environment,
                    n_episodes=config.eval_episodes,
                    max_steps=config.eval_max_steps,
                )
                eval_history.append(eval_metrics)
                if eval_environment is environment:
                    environment.reset()
                    tracker.reset_episode()
                logger.info(
                    "eval @ iteration %d: return=%.3f +/- %.3f length=%.1f",
                    iteration,
                    eval_metrics.mean_return,
                    eval_metrics.std_return,
                    eval_metrics.mean_length,
                )
                if metrics_file is not None:
                    metrics_file.write({"iteration": iteration, **eval_metrics._asdict()})
    finally:
        if metrics_file is not None:
            metrics_file.close()

    return TrainResult(
        agent=agent,
        episode_returns=tracker.returns,
        metrics_log=metrics_log,
        eval_history=eval_history,
    )
