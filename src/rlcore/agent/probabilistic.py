"""Agents that act by querying an action distribution.

A :class:`ProbabilisticAgent` turns the distribution its network predicts
into an action according to a :class:`ProbabilisticAgentMode`:

- ``RANDOM``: sample the action space prior, ignoring the network.
- ``GREEDY``: the distribution's mode.
- ``EPSILON_GREEDY``: with probability epsilon act randomly, else greedily.
- ``PROBABILISTIC``: sample the distribution.
"""

from __future__ import annotations

import logging
import math
from abc import abstractmethod
from collections.abc import Callable, Sequence
from enum import Enum
from typing import NamedTuple

from rlcore.agent.base import Agent, StepCallback
from rlcore.dataprotocol.trajectory import Trajectory, TrajectoryStep
from rlcore.distributions import Distribution
from rlcore.env.base import Environment
from rlcore.seeding import get_rng
from rlcore.types import Action, Step, StepKind

logger = logging.getLogger(__name__)

EntryHook = Callable[[TrajectoryStep, Step], None]


class ModeKind(Enum):
    RANDOM = "random"
    GREEDY = "greedy"
    EPSILON_GREEDY = "epsilon_greedy"
    PROBABILISTIC = "probabilistic"


class ProbabilisticAgentMode(NamedTuple):
    """Action selection rule. Build epsilon-greedy modes with :meth:`epsilon_greedy`."""

    kind: ModeKind
    epsilon: float = 0.0

    @classmethod
    def epsilon_greedy(cls, epsilon: float) -> ProbabilisticAgentMode:
        if not 0.0 <= epsilon <= 1.0:
            raise ValueError(f"epsilon must lie in [0, 1], got {epsilon}")
        return cls(ModeKind.EPSILON_GREEDY, float(epsilon))

    def __repr__(self) -> str:
        if self.kind is ModeKind.EPSILON_GREEDY:
            return f"ProbabilisticAgentMode.epsilon_greedy({self.epsilon})"
        return f"ProbabilisticAgentMode.{self.kind.name}"


ProbabilisticAgentMode.RANDOM = ProbabilisticAgentMode(ModeKind.RANDOM)
ProbabilisticAgentMode.GREEDY = ProbabilisticAgentMode(ModeKind.GREEDY)
ProbabilisticAgentMode.PROBABILISTIC = ProbabilisticAgentMode(ModeKind.PROBABILISTIC)


class ProbabilisticAgent(Agent):
    """Agent whose policy is an action distribution predicted per step."""

    @abstractmethod
    async def action_distribution(self, step: Step) -> Distribution:
        """Predict the action distribution for *step*.

        Implementations query the network and replace ``self.state`` with
        the state the network returns.
        """
        ...

    async def action(
        self,
        step: Step,
        mode: ProbabilisticAgentMode = ProbabilisticAgentMode.GREEDY,
    ) -> Action:
        """Select an action for *step* according to *mode*.

        In ``RANDOM`` mode (and on the random branch of epsilon-greedy) the
        network is not queried and ``self.state`` is left untouched.
        """
        kind = mode.kind
        if kind is ModeKind.EPSILON_GREEDY:
            kind = ModeKind.RANDOM if get_rng().random() < mode.epsilon else ModeKind.GREEDY

        if kind is ModeKind.RANDOM:
            return self.action_space.sample()
        distribution = await self.action_distribution(step)
        if kind is ModeKind.GREEDY:
            return distribution.mode()
        return distribution.sample()

    async def _collect(
        self,
        environment: Environment,
        mode: ProbabilisticAgentMode,
        max_steps: int | float = math.inf,
        max_episodes: int | float = math.inf,
        callbacks: Sequence[StepCallback] = (),
        trajectory: Trajectory | None = None,
        on_entry: EntryHook | None = None,
    ) -> Trajectory:
        """Interact with *environment* until a budget is exhausted.

        Each iteration selects an action from the environment's current
        step, steps the environment, appends an entry holding the
        pre-step observation and agent state, calls *on_entry* with the
        entry and the new step, then invokes every callback in order.
        Errors from the network, the environment or a callback propagate
        unchanged; entries appended so far remain in *trajectory*.
        """
        trajectory = Trajectory() if trajectory is None else trajectory
        current_step = environment.current_step
        num_steps = 0
        num_episodes = 0
        while num_steps < max_steps and num_episodes < max_episodes:
            state = self.state
            action = await self.action(current_step, mode)
            next_step = environment.step(action)
            entry = trajectory.append(
                step_kind=next_step.kind,
                observation=current_step.observation,
                state=state,
                action=action,
                reward=next_step.reward,
            )
            if on_entry is not None:
                on_entry(entry, next_step)
            for callback in callbacks:
                callback(environment, trajectory)
            num_steps += 1
            if next_step.kind == StepKind.LAST:
                num_episodes += 1
            current_step = next_step
        logger.debug(
            "Collected %d steps (%d episodes) with mode %r", num_steps, num_episodes, mode
        )
        return trajectory

    async def run(
        self,
        environment: Environment,
        mode: ProbabilisticAgentMode = ProbabilisticAgentMode.GREEDY,
        max_steps: int | float = math.inf,
        max_episodes: int | float = math.inf,
        callbacks: Sequence[StepCallback] = (),
        trajectory: Trajectory | None = None,
    ) -> None:
        """Act in *environment* without training.

        Stops once ``max_steps`` steps were taken or ``max_episodes``
        episodes completed, whichever comes first. Pass *trajectory* to
        keep the collected entries.
        """
        await self._collect(
            environment,
            mode,
            max_steps=max_steps,
            max_episodes=max_episodes,
            callbacks=callbacks,
            trajectory=trajectory,
        )
