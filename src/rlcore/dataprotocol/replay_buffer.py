"""Replay buffer for off-policy agents.

Entries are kept as Python objects in a fixed-capacity ring: once full,
each push overwrites the oldest entry, so ``len(buffer) <= capacity``
holds no matter how many collection calls feed it. Sampling draws indices
uniformly, with replacement, from the shared numpy generator.

Typical usage::

    buffer = ReplayBuffer(capacity=1_000)
    buffer.push(ReplayTransition(step=entry, next_observation=obs, next_state=state))
    if len(buffer) > 0:
        transition = buffer.sample_one()
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, NamedTuple, TypeVar

from rlcore.dataprotocol.trajectory import TrajectoryStep
from rlcore.seeding import get_rng
from rlcore.types import Observation, State

T = TypeVar("T")


class ReplayTransition(NamedTuple):
    """A trajectory entry together with what followed it.

    ``next_observation`` / ``next_state`` are the network input for the
    successor step; they are ignored when ``step.step_kind`` is ``LAST``.
    """

    step: TrajectoryStep
    next_observation: Observation
    next_state: State


class ReplayBuffer(Generic[T]):
    """Fixed-size circular buffer with uniform random sampling."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"Replay buffer capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._storage: list[T] = []
        self._ptr = 0

    def push(self, item: T) -> None:
        """Store a single entry, evicting the oldest one when full."""
        if len(self._storage) < self.capacity:
            self._storage.append(item)
        else:
            self._storage[self._ptr] = item
        self._ptr = (self._ptr + 1) % self.capacity

    def sample_one(self) -> T:
        """Draw one entry uniformly at random."""
        if not self._storage:
            raise IndexError("Cannot sample from an empty replay buffer")
        return self._storage[int(get_rng().integers(len(self._storage)))]

    def sample(self, batch_size: int) -> list[T]:
        """Draw *batch_size* independent uniform samples (with replacement)."""
        if not self._storage:
            raise IndexError("Cannot sample from an empty replay buffer")
        indices = get_rng().integers(len(self._storage), size=batch_size)
        return [self._storage[int(i)] for i in indices]

    def clear(self) -> None:
        self._storage.clear()
        self._ptr = 0

    def __len__(self) -> int:
        return len(self._storage)

    def __iter__(self) -> Iterator[T]:
        # Oldest to newest.
        if len(self._storage) < self.capacity:
            return iter(self._storage)
        return iter(self._storage[self._ptr:] + self._storage[: self._ptr])
