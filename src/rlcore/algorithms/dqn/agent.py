"""Deep Q-Network agent.

Mnih et al., "Human-level control through deep reinforcement learning",
Nature 518, 2015.

Each call to :meth:`DQNAgent.train` has two phases:

1. Collect: act epsilon-greedily and push every collected entry, with the
   observation and agent state that followed it, into a ring replay buffer.
2. Train: draw ``train_steps_per_iteration`` transitions uniformly from
   the buffer and regress ``Q(s, a)`` onto the TD target
   ``r + gamma * max_a' Q_target(s', a')`` under a Huber loss. The
   bootstrap term is dropped when the entry ended an episode.

The target network starts as a copy of the online network and is moved
towards it every ``target_update_period`` train steps with Polyak
averaging: ``target = f * online + (1 - f) * target``.

Usage::

    agent = DQNAgent(env, QNetwork(obs_dim, n_actions, key=key), config=DQNConfig())
    loss = await agent.train(env, max_steps=32)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import jax
import jax.numpy as jnp
import numpy as np
import optax

from rlcore.agent.base import StepCallback
from rlcore.agent.probabilistic import ProbabilisticAgent, ProbabilisticAgentMode
from rlcore.algorithms.dqn.config import DQNConfig
from rlcore.dataprotocol.replay_buffer import ReplayBuffer, ReplayTransition
from rlcore.dataprotocol.trajectory import Trajectory, TrajectoryStep, stack
from rlcore.distributions import Categorical, DiscreteDistribution
from rlcore.env.base import Environment
from rlcore.networks.base import TargetNetwork
from rlcore.types import AgentInput, QNetworkOutput, State, Step, StepKind

logger = logging.getLogger(__name__)


def _check_config(config: DQNConfig) -> None:
    if config.train_sequence_length <= 0:
        raise ValueError(
            f"train_sequence_length must be greater than 0, got {config.train_sequence_length}"
        )
    if config.train_sequence_length >= config.max_replayed_sequence_length:
        raise ValueError(
            "train_sequence_length must be smaller than max_replayed_sequence_length, "
            f"got {config.train_sequence_length} >= {config.max_replayed_sequence_length}"
        )
    if not 0.0 < config.target_update_forget_factor <= 1.0:
        raise ValueError(
            "target_update_forget_factor must lie in (0, 1], "
            f"got {config.target_update_forget_factor}"
        )
    if config.target_update_period <= 0:
        raise ValueError(
            f"target_update_period must be greater than 0, got {config.target_update_period}"
        )


class DQNAgent(ProbabilisticAgent):
    """Off-policy Q-learning agent for discrete action spaces.

    Args:
        environment: Environment whose action space is discrete.
        network: Online Q-network; must support ``copy()`` and
            ``soft_update()`` so a target network can be derived from it.
        initial_state: Initial recurrent state.
        config: Hyperparameters.

    Raises:
        ValueError: If *config* is inconsistent.
        TypeError: If the action space is not discrete.
    """

    def __init__(
        self,
        environment: Environment,
        network: TargetNetwork[QNetworkOutput],
        initial_state: State = None,
        config: DQNConfig = DQNConfig(),
    ) -> None:
        _check_config(config)
        distribution = environment.action_space.distribution
        if not isinstance(distribution, DiscreteDistribution):
            raise TypeError(
                f"DQN needs a discrete action space, got {environment.action_space!r}"
            )
        super().__init__(environment, network, initial_state)
        self.config = config
        self.exploration_mode = ProbabilisticAgentMode.epsilon_greedy(config.epsilon_greedy)
        self.target_network = network.copy()
        self.replay_buffer: ReplayBuffer[ReplayTransition] = ReplayBuffer(
            capacity=config.max_replayed_sequence_length
        )
        self.train_steps = 0

    async def action_distribution(self, step: Step) -> DiscreteDistribution:
        output = await self.network.prediction(AgentInput(step.observation, self.state))
        self.state = output.state
        return Categorical.from_logits(output.q_values)

    async def train(
        self,
        environment: Environment,
        max_steps: int | float = math.inf,
        max_episodes: int | float = math.inf,
        callbacks: Sequence[StepCallback] = (),
        trajectory: Trajectory | None = None,
    ) -> float:
        def remember(entry: TrajectoryStep, next_step: Step) -> None:
            self.replay_buffer.push(
                ReplayTransition(
                    step=entry,
                    next_observation=next_step.observation,
                    next_state=self.state,
                )
            )

        await self._collect(
            environment,
            self.exploration_mode,
            max_steps=max_steps,
            max_episodes=max_episodes,
            callbacks=callbacks,
            trajectory=trajectory,
            on_entry=remember,
        )

        losses = []
        for _ in range(self.config.train_steps_per_iteration):
            if len(self.replay_buffer) == 0:
                continue
            losses.append(await self._train_step([self.replay_buffer.sample_one()]))
        logger.debug(
            "DQN train: replay_size=%d draws=%d train_steps=%d",
            len(self.replay_buffer),
            len(losses),
            self.train_steps,
        )
        if not losses:
            return 0.0
        return float(np.mean(losses))

    async def update(self, trajectory: Trajectory) -> float:
        """One batched TD update on consecutive entries of *trajectory*.

        Each entry's successor is the next entry. The final entry has no
        recorded successor and is only kept when it ended an episode, in
        which case no bootstrap is needed.
        """
        steps = list(trajectory)
        transitions = [
            ReplayTransition(step, successor.observation, successor.state)
            for step, successor in zip(steps, steps[1:])
        ]
        if steps and steps[-1].step_kind == StepKind.LAST:
            last = steps[-1]
            transitions.append(ReplayTransition(last, last.observation, last.state))
        if not transitions:
            return 0.0
        return await self._train_step(transitions)

    async def td_targets(self, transitions: Sequence[ReplayTransition]) -> jax.Array:
        """``r + gamma * max_a Q_target(s', a)``, without bootstrap after ``LAST``."""
        next_input = AgentInput(
            observation=stack([t.next_observation for t in transitions]),
            state=stack([t.next_state for t in transitions]),
        )
        next_q_values = (await self.target_network.prediction(next_input)).q_values
        rewards = jnp.asarray([t.step.reward for t in transitions], dtype=jnp.float32)
        not_last = jnp.asarray(
            [t.step.step_kind != StepKind.LAST for t in transitions], dtype=jnp.float32
        )
        bootstrap = jnp.max(next_q_values, axis=-1)
        return rewards + self.config.discount_factor * not_last * bootstrap

    async def _train_step(self, transitions: Sequence[ReplayTransition]) -> float:
        targets = await self.td_targets(transitions)
        actions = jnp.asarray([t.step.action for t in transitions], dtype=jnp.int32)
        input = AgentInput(
            observation=stack([t.step.observation for t in transitions]),
            state=stack([t.step.state for t in transitions]),
        )

        def loss_fn(output: QNetworkOutput):
            q_values = jnp.take_along_axis(output.q_values, actions[:, None], axis=-1)[:, 0]
            return jnp.mean(optax.huber_loss(q_values, jax.lax.stop_gradient(targets)))

        loss = await self.network.update(input, loss_fn)

        self.train_steps += 1
        if self.train_steps % self.config.target_update_period == 0:
            logger.debug(
                "Target sync at train step %d (forget_factor=%s)",
                self.train_steps,
                self.config.target_update_forget_factor,
            )
            self.target_network.soft_update(
                self.network, self.config.target_update_forget_factor
            )
        return loss
