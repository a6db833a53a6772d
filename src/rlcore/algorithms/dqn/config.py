"""DQN hyperparameters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DQNConfig:
    """All DQN hyperparameters in one place.

    Optimiser settings live with the network (see ``NetworkConfig``).
    Consistency is checked when the agent is constructed.
    """

    # Exploration
    epsilon_greedy: float = 0.1

    discount_factor: float = 0.99

    # Replay
    train_sequence_length: int = 1
    max_replayed_sequence_length: int = 10_000
    train_steps_per_iteration: int = 1

    # Target network
    target_update_forget_factor: float = 1.0
    target_update_period: int = 1
