"""Runner configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RunnerConfig:
    """Shared hyperparameters for the outer training loop.

    Controls the iteration budget, evaluation schedule and logging.
    Algorithm-specific settings live in the algorithm's own config
    (e.g., ``ReinforceConfig``, ``DQNConfig``).
    """

    # Training budget
    iterations: int = 100
    max_steps: int | None = None  # per iteration, None = unbounded
    max_episodes: int | None = 1  # per iteration, None = unbounded

    # Evaluation
    eval_every: int = 0  # 0 disables evaluation
    eval_episodes: int = 5
    eval_max_steps: int = 200

    # Logging
    log_interval: int = 10
    log_dir: str | None = None  # None = no JSONL metrics

    # Seeding
    seed: int = 0
