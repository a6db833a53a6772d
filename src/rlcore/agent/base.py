"""Agent interface.

An agent exclusively owns three things:

* ``action_space``: taken from the environment it was built for;
* ``network``: its function approximator (see ``rlcore.networks``);
* ``state``: an opaque recurrent value. Every network output carries the
  next state explicitly and the agent reassigns it wholesale on each
  prediction, so no other object ever holds a live reference to it.

Agents are driven through coroutines: network calls are awaited, while
environment steps and callbacks run synchronously in between.

Example usage::

    agent = ReinforceAgent(env, network, config=ReinforceConfig())
    loss = await agent.train(env, max_episodes=8)
    await agent.run(env, mode=ProbabilisticAgentMode.GREEDY, max_episodes=1)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from rlcore.dataprotocol.trajectory import Trajectory
from rlcore.env.base import Environment
from rlcore.env.spaces import Space
from rlcore.networks.base import Network
from rlcore.types import Action, State, Step

StepCallback = Callable[[Environment, Trajectory], None]
"""Called once per collected step with ``(environment, trajectory)``; may mutate both."""


class Agent(ABC):
    """Abstract base for all agents.

    Args:
        environment: Environment the agent acts in; only its action space
            is retained.
        network: Function approximator owned by this agent.
        initial_state: Initial recurrent state (``None`` for stateless
            networks).
    """

    def __init__(
        self,
        environment: Environment,
        network: Network,
        initial_state: State = None,
    ) -> None:
        self.action_space: Space = environment.action_space
        self.network = network
        self.state = initial_state

    @abstractmethod
    async def action(self, step: Step) -> Action:
        """Select an action for the given environment step."""
        ...

    @abstractmethod
    async def update(self, trajectory: Trajectory) -> float:
        """Perform one training update on collected experience.

        Returns:
            The scalar training loss.
        """
        ...

    @abstractmethod
    async def train(
        self,
        environment: Environment,
        max_steps: int | float = math.inf,
        max_episodes: int | float = math.inf,
        callbacks: Sequence[StepCallback] = (),
        trajectory: Trajectory | None = None,
    ) -> float:
        """Collect experience in *environment* and train on it.

        Returns:
            The scalar training loss.
        """
        ...

    def __repr__(self) -> str:
        fields: dict[str, Any] = {"action_space": self.action_space, "state": self.state}
        body = ", ".join(f"{k}={v!r}" for k, v in fields.items())
        return f"{self.__class__.__name__}({body})"
