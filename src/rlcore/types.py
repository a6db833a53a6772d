"""Core type definitions for rlcore.

Containers are NamedTuples: immutable, cheap, and valid JAX pytrees, so a
network can consume them directly inside a traced loss.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import Any, NamedTuple, TypeAlias

import chex
import numpy as np

from rlcore.distributions.base import Distribution

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
Observation: TypeAlias = Any
Action: TypeAlias = Any
State: TypeAlias = Any  # opaque recurrent agent state
Reward: TypeAlias = float
Value: TypeAlias = chex.Array


# ---------------------------------------------------------------------------
# Environment steps
# ---------------------------------------------------------------------------
class StepKind(IntEnum):
    """Position of a step inside an episode.

    ``FIRST`` opens an episode and ``LAST`` closes it, so the number of
    episodes in a sequence equals the number of ``LAST`` markers.
    """

    FIRST = 0
    TRANSITION = 1
    LAST = 2


class Step(NamedTuple):
    """One snapshot produced by ``Environment.step`` / ``Environment.reset``."""

    kind: StepKind
    observation: Observation
    reward: Reward


def as_step_kinds(step_kinds: Sequence[StepKind] | np.ndarray) -> np.ndarray:
    """Convert step kinds to an ``int32`` array of their integer values."""
    return np.asarray(step_kinds, dtype=np.int32)


def episode_count(step_kinds: Sequence[StepKind] | np.ndarray) -> int:
    """Number of completed episodes, i.e. of ``LAST`` markers."""
    return int(np.sum(as_step_kinds(step_kinds) == StepKind.LAST))


def complete_episode_mask(step_kinds: Sequence[StepKind] | np.ndarray) -> np.ndarray:
    """``1.0`` for every position belonging to a completed episode.

    Positions after the final ``LAST`` marker belong to an episode that is
    still running and are masked out with ``0.0``.
    """
    kinds = as_step_kinds(step_kinds)
    mask = np.zeros(kinds.shape, dtype=np.float32)
    last_positions = np.flatnonzero(kinds == StepKind.LAST)
    if last_positions.size:
        mask[: last_positions[-1] + 1] = 1.0
    return mask


# ---------------------------------------------------------------------------
# Network inputs and outputs
# ---------------------------------------------------------------------------
class AgentInput(NamedTuple):
    """Network input. Fields may carry a leading time/batch axis."""

    observation: Observation
    state: State


class ActorOutput(NamedTuple):
    action_distribution: Distribution
    state: State


class ActorCriticOutput(NamedTuple):
    action_distribution: Distribution
    value: Value
    state: State


class QNetworkOutput(NamedTuple):
    q_values: chex.Array
    state: State
