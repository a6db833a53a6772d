"""Advantage actor-critic (A2C).

Mnih et al., "Asynchronous Methods for Deep Reinforcement Learning",
https://arxiv.org/abs/1602.01783 (synchronous variant).

The network evaluates the whole trajectory in one batched call. The value
predicted for the final entry only serves as the bootstrap estimate for
advantage estimation; the remaining ``T - 1`` entries are trained on.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp

from rlcore.agent.policy_gradient import PolicyGradientAgent
from rlcore.algorithms.a2c.config import A2CConfig
from rlcore.dataprotocol.trajectory import Trajectory
from rlcore.env.base import Environment
from rlcore.networks.base import Network
from rlcore.ops import normalize
from rlcore.types import ActorCriticOutput, State

logger = logging.getLogger(__name__)


class A2CAgent(PolicyGradientAgent):
    def __init__(
        self,
        environment: Environment,
        network: Network[ActorCriticOutput],
        initial_state: State = None,
        config: A2CConfig = A2CConfig(),
    ) -> None:
        super().__init__(environment, network, initial_state)
        self.config = config
        self.advantage_function = config.make_advantage_function()

    async def update(self, trajectory: Trajectory) -> float:
        if len(trajectory) < 2:
            logger.debug("Skipping A2C update: %d steps is too short", len(trajectory))
            return 0.0

        config = self.config
        advantage_function = self.advantage_function
        sequence_length = len(trajectory) - 1
        step_kinds = trajectory.step_kinds[:sequence_length]
        rewards = trajectory.rewards[:sequence_length]
        actions = trajectory.actions

        def loss_fn(output: ActorCriticOutput):
            values = output.value[:sequence_length]
            final_value = output.value[sequence_length]
            estimate = advantage_function(
                step_kinds,
                rewards,
                jax.lax.stop_gradient(values),
                jax.lax.stop_gradient(final_value),
            )
            advantages = estimate.advantages
            if config.normalize_advantages:
                advantages = normalize(advantages)
            returns = estimate.discounted_returns()

            distribution = output.action_distribution
            log_probs = distribution.log_probability(actions)[:sequence_length]
            policy_gradient_loss = -jnp.mean(log_probs * advantages)

            value_mse = jnp.mean(jnp.square(values - returns))
            loss = policy_gradient_loss + config.value_estimation_loss_weight * value_mse

            if config.entropy_regularization_weight > 0.0:
                entropy = jnp.mean(distribution.entropy()[:sequence_length])
                loss = loss - config.entropy_regularization_weight * entropy
            return loss

        loss = await self.network.update(trajectory.agent_input(), loss_fn)
        logger.debug("A2C update: %d steps, loss=%.4f", sequence_length, loss)
        return loss
