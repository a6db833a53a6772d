#!/usr/bin/env python3
"""Unified training script with preset selection.

Select a preset configuration and optionally override any field::

    python scripts/train.py gridworld_reinforce
    python scripts/train.py gridworld_a2c --algo.advantage_function empirical
    python scripts/train.py gridworld_dqn --runner.iterations 500 --runner.log_dir runs/dqn
    python scripts/train.py gridworld_reinforce --help
"""

from __future__ import annotations

import asyncio

from rlcore.configs import TrainConfig, algo_name, build_agent, cli
from rlcore.env import make
from rlcore.metrics import setup_logging
from rlcore.runner import train


def main(config: TrainConfig) -> None:
    setup_logging()
    env = make(config.env_id, size=config.env_size, max_steps=config.env_max_steps)
    agent = build_agent(config, env)
    print(f"Training {algo_name(config.algo)} on {config.env_id}")

    result = asyncio.run(train(agent, env, config.runner))

    n_episodes = len(result.episode_returns)
    last_returns = result.episode_returns[-10:]
    mean_return = sum(last_returns) / len(last_returns) if last_returns else 0.0
    print(
        f"Training complete | "
        f"episodes={n_episodes} | "
        f"mean_return(last 10)={mean_return:.3f}"
    )
    if result.eval_history:
        final = result.eval_history[-1]
        print(f"Final eval | return={final.mean_return:.3f} length={final.mean_length:.1f}")


if __name__ == "__main__":
    main(cli())
