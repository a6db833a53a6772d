"""Preset experiment configurations.

Each preset bundles an environment, an algorithm config, network and
runner settings. Use :func:`cli` in a training script to get a
:class:`TrainConfig` through ``overridable_config_cli``: the user picks a
preset and optionally overrides individual fields::

    python scripts/train.py gridworld_reinforce --algo.discount_factor 0.95
    python scripts/train.py gridworld_dqn --runner.iterations 2000
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Union

import tyro

from rlcore.agent.base import Agent
from rlcore.algorithms.a2c import A2CAgent, A2CConfig
from rlcore.algorithms.dqn import DQNAgent, DQNConfig
from rlcore.algorithms.reinforce import ReinforceAgent, ReinforceConfig
from rlcore.env import Discrete, Environment
from rlcore.networks import ActorCriticNetwork, ActorNetwork, NetworkConfig, QNetwork
from rlcore.runner.config import RunnerConfig
from rlcore.seeding import make_key

AlgoConfig = Annotated[
    Union[
        Annotated[ReinforceConfig, tyro.conf.subcommand("reinforce", prefix_name=False)],
        Annotated[A2CConfig, tyro.conf.subcommand("a2c", prefix_name=False)],
        Annotated[DQNConfig, tyro.conf.subcommand("dqn", prefix_name=False)],
    ],
    tyro.conf.AvoidSubcommands,
]


@dataclass(frozen=True)
class TrainConfig:
    """Full training configuration: environment, algorithm, network, runner."""

    # Environment
    env_id: str = "GridWorld-v0"
    env_size: int = 4
    env_max_steps: int = 50

    # Algorithm (one of ReinforceConfig / A2CConfig / DQNConfig)
    algo: AlgoConfig = field(default_factory=ReinforceConfig)

    network: NetworkConfig = field(default_factory=NetworkConfig)

    runner: RunnerConfig = field(default_factory=RunnerConfig)


def algo_name(algo: object) -> str:
    """Short name of an algorithm config."""
    if isinstance(algo, ReinforceConfig):
        return "reinforce"
    if isinstance(algo, A2CConfig):
        return "a2c"
    if isinstance(algo, DQNConfig):
        return "dqn"
    return type(algo).__name__.lower()


def build_agent(config: TrainConfig, environment: Environment) -> Agent:
    """Create the agent and reference network selected by *config*.

    Network parameters are initialised from ``config.runner.seed``.
    """
    action_space = environment.action_space
    if not isinstance(action_space, Discrete):
        raise TypeError(f"Reference networks need a Discrete action space, got {action_space!r}")
    obs_dim = 1
    for d in environment.observation_space.shape:
        obs_dim *= d
    n_actions = action_space.n
    key = make_key(config.runner.seed)

    algo = config.algo
    if isinstance(algo, ReinforceConfig):
        network = ActorNetwork(obs_dim, n_actions, config.network, key=key)
        return ReinforceAgent(environment, network, config=algo)
    if isinstance(algo, A2CConfig):
        network = ActorCriticNetwork(obs_dim, n_actions, config.network, key=key)
        return A2CAgent(environment, network, config=algo)
    if isinstance(algo, DQNConfig):
        network = QNetwork(obs_dim, n_actions, config.network, key=key)
        return DQNAgent(environment, network, config=algo)
    raise TypeError(f"Unknown algorithm config type: {type(algo)}")


PRESETS: dict[str, tuple[str, TrainConfig]] = {
    "gridworld_reinforce": (
        "REINFORCE on a 4x4 GridWorld-v0",
        TrainConfig(
            algo=ReinforceConfig(discount_factor=0.95),
            network=NetworkConfig(hidden_sizes=(32, 32), lr=1e-2),
            runner=RunnerConfig(iterations=300, max_episodes=4, eval_every=50),
        ),
    ),
    "gridworld_a2c": (
        "A2C on a 4x4 GridWorld-v0",
        TrainConfig(
            algo=A2CConfig(discount_factor=0.95, advantage_function="gae"),
            network=NetworkConfig(hidden_sizes=(32, 32), lr=5e-3),
            runner=RunnerConfig(iterations=300, max_steps=32, max_episodes=None, eval_every=50),
        ),
    ),
    "gridworld_dqn": (
        "DQN on a 4x4 GridWorld-v0",
        TrainConfig(
            algo=DQNConfig(
                epsilon_greedy=0.2,
                discount_factor=0.95,
                max_replayed_sequence_length=5_000,
                train_steps_per_iteration=8,
                target_update_forget_factor=0.05,
            ),
            network=NetworkConfig(hidden_sizes=(64, 64), lr=1e-3),
            runner=RunnerConfig(iterations=1_000, max_steps=16, max_episodes=None, eval_every=200),
        ),
    ),
}


def cli(
    args: list[str] | None = None,
    **kwargs: object,
) -> TrainConfig:
    """Parse a preset + overrides from the command line.

    Usage::

        config = cli()                                      # parse sys.argv
        config = cli(["gridworld_a2c", "--runner.iterations", "10"])
    """
    return tyro.extras.overridable_config_cli(
        PRESETS,
        args=args,
        use_underscores=True,
        **kwargs,  # type: ignore[arg-type]
    )
