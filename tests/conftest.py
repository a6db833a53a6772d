"""Shared fakes: deterministic environments and scripted networks.

Scripted networks never change their outputs on ``update``; they evaluate
the agent's loss function on their forward output and record the call,
which makes agent losses checkable against closed-form values.
"""

from __future__ import annotations

from typing import Any

import jax.numpy as jnp
import numpy as np
import pytest

from rlcore.distributions import Categorical
from rlcore.env import Box, Discrete, Environment
from rlcore.seeding import set_seed
from rlcore.types import (
    ActorCriticOutput,
    ActorOutput,
    AgentInput,
    QNetworkOutput,
    Step,
    StepKind,
)


@pytest.fixture(autouse=True)
def _seed() -> None:
    set_seed(0)


# ---------------------------------------------------------------------------
# Environments
# ---------------------------------------------------------------------------


class CountdownEnvironment(Environment):
    """Episodes of exactly ``episode_length`` steps with reward ``-0.1`` each.

    Two actions, both valid and both with the same effect. The observation
    is the fraction of the episode already elapsed.
    """

    def __init__(self, episode_length: int = 5) -> None:
        self.episode_length = episode_length
        self.action_space = Discrete(2)
        self.observation_space = Box(low=0.0, high=1.0, shape=(1,))
        self.total_steps = 0
        self._t = 0
        self._step = Step(StepKind.FIRST, self._obs(), 0.0)

    def _obs(self) -> np.ndarray:
        return np.array([self._t / self.episode_length], dtype=np.float32)

    @property
    def current_step(self) -> Step:
        return self._step

    def reset(self) -> Step:
        self._t = 0
        self._step = Step(StepKind.FIRST, self._obs(), 0.0)
        return self._step

    def step(self, action: Any) -> Step:
        self.check_action(action)
        if self._step.kind == StepKind.LAST:
            self.reset()
        self._t += 1
        kind = StepKind.LAST if self._t >= self.episode_length else StepKind.TRANSITION
        self._step = Step(kind, self._obs(), -0.1)
        self.total_steps += 1
        return self._step


class WorkoutEnvironment(Environment):
    """Training-load toy problem.

    Observation ``[fitness, fatigue]``. ``WORKOUT`` adds 100 to both,
    ``RECOVERY`` removes 100 fatigue. Fatigue of 300 or more wipes out all
    progress; fitness of 1000 wins (+1); fatigue below -500 loses (-1).
    Every other step costs 0.1.
    """

    WORKOUT = 0
    RECOVERY = 1
    EFFORT = 100.0

    def __init__(self) -> None:
        self.action_space = Discrete(2)
        self.observation_space = Box(
            low=np.array([0.0, -500.0], dtype=np.float32),
            high=np.array([1000.0, 300.0], dtype=np.float32),
        )
        self.fitness = 0.0
        self.fatigue = 0.0
        self.total_steps = 0
        self.total_reward = 0.0
        self._step = Step(StepKind.FIRST, self._obs(), 0.0)

    def _obs(self) -> np.ndarray:
        return np.array([self.fitness, self.fatigue], dtype=np.float32)

    @property
    def current_step(self) -> Step:
        return self._step

    def reset(self) -> Step:
        self.fitness = 0.0
        self.fatigue = 0.0
        self._step = Step(StepKind.FIRST, self._obs(), 0.0)
        return self._step

    def step(self, action: Any) -> Step:
        self.check_action(action)
        if self._step.kind == StepKind.LAST:
            self.reset()

        if action == self.WORKOUT:
            self.fitness += self.EFFORT
            self.fatigue += self.EFFORT
        else:
            self.fatigue -= self.EFFORT
        if self.fatigue >= 300.0:
            self.fitness = 0.0
            self.fatigue = 0.0

        if self.fitness >= 1000.0:
            kind, reward = StepKind.LAST, 1.0
        elif self.fatigue < -500.0:
            self.fatigue = 0.0
            kind, reward = StepKind.LAST, -1.0
        else:
            kind, reward = StepKind.TRANSITION, -self.EFFORT / 1000.0

        self._step = Step(kind, self._obs(), reward)
        self.total_steps += 1
        self.total_reward += reward
        return self._step


# ---------------------------------------------------------------------------
# Scripted networks
# ---------------------------------------------------------------------------


def _leading_dim(observation: Any) -> int | None:
    obs = np.asarray(observation)
    return obs.shape[0] if obs.ndim > 1 else None


def _next_state(state: Any) -> Any:
    return None if state is None else state + 1


class _ScriptedNetwork:
    def __init__(self) -> None:
        self.prediction_calls = 0
        self.update_calls = 0
        self.losses: list[float] = []
        self.last_input: AgentInput | None = None

    def _output(self, input: AgentInput) -> Any:
        raise NotImplementedError

    async def prediction(self, input: AgentInput) -> Any:
        self.prediction_calls += 1
        return self._output(input)

    async def update(self, input: AgentInput, loss_fn) -> float:
        self.update_calls += 1
        self.last_input = input
        loss = float(loss_fn(self._output(input)))
        self.losses.append(loss)
        return loss


class ScriptedActorNetwork(_ScriptedNetwork):
    """Fixed action probabilities; the state counts predictions."""

    def __init__(self, probabilities: list[float]) -> None:
        super().__init__()
        self.probabilities = jnp.asarray(probabilities, dtype=jnp.float32)

    def _distribution(self, input: AgentInput) -> Categorical:
        n = _leading_dim(input.observation)
        probs = self.probabilities
        if n is not None:
            probs = jnp.broadcast_to(probs, (n, probs.shape[0]))
        return Categorical(probs)

    def _output(self, input: AgentInput) -> ActorOutput:
        return ActorOutput(self._distribution(input), _next_state(input.state))


class ScriptedActorCriticNetwork(ScriptedActorNetwork):
    """Fixed action probabilities plus values given per observation."""

    def __init__(self, probabilities: list[float], value_fn) -> None:
        super().__init__(probabilities)
        self.value_fn = value_fn

    def _output(self, input: AgentInput) -> ActorCriticOutput:
        obs = jnp.asarray(input.observation, dtype=jnp.float32)
        return ActorCriticOutput(
            action_distribution=self._distribution(input),
            value=self.value_fn(obs),
            state=_next_state(input.state),
        )


class ScriptedQNetwork(_ScriptedNetwork):
    """Fixed Q-values plus a scalar ``offset`` that soft updates mix."""

    def __init__(self, q_values: list[float], offset: float = 0.0) -> None:
        super().__init__()
        self.q_values = jnp.asarray(q_values, dtype=jnp.float32)
        self.offset = offset
        self.soft_updates: list[float] = []

    def _output(self, input: AgentInput) -> QNetworkOutput:
        q = self.q_values + self.offset
        n = _leading_dim(input.observation)
        if n is not None:
            q = jnp.broadcast_to(q, (n, q.shape[0]))
        return QNetworkOutput(q, _next_state(input.state))

    def copy(self) -> ScriptedQNetwork:
        return ScriptedQNetwork(list(np.asarray(self.q_values)), self.offset)

    def soft_update(self, source: ScriptedQNetwork, forget_factor: float) -> None:
        self.soft_updates.append(forget_factor)
        self.q_values = forget_factor * source.q_values + (1.0 - forget_factor) * self.q_values
        self.offset = forget_factor * source.offset + (1.0 - forget_factor) * self.offset


class FailingNetwork(ScriptedActorNetwork):
    """Raises on the ``fail_at``-th prediction."""

    def __init__(self, fail_at: int) -> None:
        super().__init__([0.5, 0.5])
        self.fail_at = fail_at

    async def prediction(self, input: AgentInput) -> ActorOutput:
        if self.prediction_calls + 1 >= self.fail_at:
            raise RuntimeError("network unavailable")
        return await super().prediction(input)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def countdown_env() -> CountdownEnvironment:
    return CountdownEnvironment(episode_length=5)


@pytest.fixture
def workout_env() -> WorkoutEnvironment:
    return WorkoutEnvironment()
