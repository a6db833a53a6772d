"""Trajectory containers for collected experience.

A ``Trajectory`` is an append-only buffer of ``TrajectoryStep`` entries
gathered during one interaction run. Entries are stored row-wise; the
columnar properties stack them along a leading time axis so a network can
evaluate the whole trajectory in one batched call.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, NamedTuple

import jax
import jax.numpy as jnp
import numpy as np

from rlcore.types import Action, AgentInput, Observation, Reward, State, StepKind


class TrajectoryStep(NamedTuple):
    """One collected entry.

    Fields:
        step_kind:   Kind of the step produced *after* taking ``action``.
        observation: Observation the action was chosen from.
        state:       Agent state before choosing the action.
        action:      Action taken.
        reward:      Reward received for the action.
    """

    step_kind: StepKind
    observation: Observation
    state: State
    action: Action
    reward: Reward


def stack(values: list[Any]) -> Any:
    """Stack a list of pytrees leaf-wise along a new leading axis."""
    if not values:
        raise ValueError("Cannot stack an empty list of entries")
    return jax.tree.map(lambda *xs: jnp.stack([jnp.asarray(x) for x in xs]), *values)


class Trajectory:
    """Ordered, append-only sequence of :class:`TrajectoryStep`."""

    def __init__(self, steps: list[TrajectoryStep] | None = None) -> None:
        self.steps: list[TrajectoryStep] = list(steps) if steps else []

    def append(
        self,
        step_kind: StepKind,
        observation: Observation,
        state: State,
        action: Action,
        reward: Reward,
    ) -> TrajectoryStep:
        entry = TrajectoryStep(
            step_kind=StepKind(step_kind),
            observation=observation,
            state=state,
            action=action,
            reward=reward,
        )
        self.steps.append(entry)
        return entry

    @property
    def num_episodes(self) -> int:
        return sum(1 for s in self.steps if s.step_kind == StepKind.LAST)

    @property
    def current_step(self) -> TrajectoryStep | None:
        return self.steps[-1] if self.steps else None

    # ---- columnar views ----

    @property
    def step_kinds(self) -> np.ndarray:
        return np.asarray([s.step_kind for s in self.steps], dtype=np.int32)

    @property
    def rewards(self) -> jax.Array:
        return jnp.asarray([s.reward for s in self.steps], dtype=jnp.float32)

    @property
    def actions(self) -> jax.Array:
        return stack([s.action for s in self.steps])

    @property
    def observations(self) -> Any:
        return stack([s.observation for s in self.steps])

    @property
    def states(self) -> Any:
        return stack([s.state for s in self.steps])

    def agent_input(self) -> AgentInput:
        """Batched network input covering every entry."""
        return AgentInput(observation=self.observations, state=self.states)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[TrajectoryStep]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> TrajectoryStep:
        return self.steps[index]

    def __repr__(self) -> str:
        return f"Trajectory(steps={len(self.steps)}, episodes={self.num_episodes})"
