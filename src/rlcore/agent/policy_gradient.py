"""Shared training loop of on-policy policy-gradient agents."""

from __future__ import annotations

import math
from collections.abc import Sequence

from rlcore.agent.base import StepCallback
from rlcore.agent.probabilistic import ProbabilisticAgent, ProbabilisticAgentMode
from rlcore.dataprotocol.trajectory import Trajectory
from rlcore.distributions import Distribution
from rlcore.env.base import Environment
from rlcore.types import AgentInput, Step


class PolicyGradientAgent(ProbabilisticAgent):
    """Collects one on-policy trajectory by sampling, then updates on it.

    The default :meth:`action_distribution` reads the
    ``action_distribution`` field of the network output, which both
    ``ActorOutput`` and ``ActorCriticOutput`` provide.
    """

    async def action_distribution(self, step: Step) -> Distribution:
        output = await self.network.prediction(AgentInput(step.observation, self.state))
        self.state = output.state
        return output.action_distribution

    async def train(
        self,
        environment: Environment,
        max_steps: int | float = math.inf,
        max_episodes: int | float = math.inf,
        callbacks: Sequence[StepCallback] = (),
        trajectory: Trajectory | None = None,
    ) -> float:
        trajectory = await self._collect(
            environment,
            ProbabilisticAgentMode.PROBABILISTIC,
            max_steps=max_steps,
            max_episodes=max_episodes,
            callbacks=callbacks,
            trajectory=trajectory,
        )
        return await self.update(trajectory)
