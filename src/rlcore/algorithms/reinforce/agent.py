"""REINFORCE: Monte-Carlo policy gradient.

Williams, "Simple Statistical Gradient-Following Algorithms for
Connectionist Reinforcement Learning", Machine Learning 8, 1992.

Usage::

    agent = ReinforceAgent(env, ActorNetwork(obs_dim, n_actions, key=key))
    loss = await agent.train(env, max_episodes=8)
"""

from __future__ import annotations

import logging

import jax.numpy as jnp

from rlcore.agent.policy_gradient import PolicyGradientAgent
from rlcore.algorithms.reinforce.config import ReinforceConfig
from rlcore.dataprotocol.trajectory import Trajectory
from rlcore.env.base import Environment
from rlcore.networks.base import Network
from rlcore.ops import normalize
from rlcore.types import ActorOutput, State, complete_episode_mask
from rlcore.values import discounted_returns

logger = logging.getLogger(__name__)


class ReinforceAgent(PolicyGradientAgent):
    """Policy-gradient agent weighting log-probabilities by discounted returns.

    Only completed episodes contribute to the gradient: entries after the
    last ``LAST`` marker of a trajectory are masked out.
    """

    def __init__(
        self,
        environment: Environment,
        network: Network[ActorOutput],
        initial_state: State = None,
        config: ReinforceConfig = ReinforceConfig(),
    ) -> None:
        super().__init__(environment, network, initial_state)
        self.config = config

    async def update(self, trajectory: Trajectory) -> float:
        num_episodes = trajectory.num_episodes
        if num_episodes == 0:
            logger.debug(
                "Skipping REINFORCE update: no completed episode in %d steps",
                len(trajectory),
            )
            return 0.0

        config = self.config
        step_kinds = trajectory.step_kinds
        mask = jnp.asarray(complete_episode_mask(step_kinds))
        returns = discounted_returns(config.discount_factor, step_kinds, trajectory.rewards)
        if config.normalize_returns:
            returns = normalize(returns, mask)
        actions = trajectory.actions
        entropy_weight = config.entropy_regularization_weight

        def loss_fn(output: ActorOutput):
            distribution = output.action_distribution
            log_probs = distribution.log_probability(actions)
            policy_gradient_loss = -jnp.sum(log_probs * returns * mask) / num_episodes
            if entropy_weight > 0.0:
                entropy = jnp.mean(distribution.entropy())
                return policy_gradient_loss - entropy_weight * entropy
            return policy_gradient_loss

        loss = await self.network.update(trajectory.agent_input(), loss_fn)
        logger.debug("REINFORCE update: %d episodes, loss=%.4f", num_episodes, loss)
        return loss
