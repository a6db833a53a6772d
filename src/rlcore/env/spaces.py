"""Action and observation spaces.

A space pairs a domain-membership predicate with the distribution its
values are sampled from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from rlcore.distributions import Categorical, Distribution, Uniform


class Space(ABC):
    """Abstract base for all spaces."""

    distribution: Distribution

    @abstractmethod
    def contains(self, x: Any) -> bool:
        """Return True if x is a valid member of this space."""
        ...

    def sample(self) -> Any:
        """Draw a random value from this space's distribution."""
        return self.distribution.sample()

    @property
    @abstractmethod
    def shape(self) -> tuple[int, ...]:
        ...


class Discrete(Space):
    """A space of integers {0, 1, ..., n-1} with a uniform prior."""

    def __init__(self, n: int) -> None:
        if n <= 0:
            raise ValueError(f"Discrete space needs n > 0, got {n}")
        self.n = n
        self.distribution = Categorical(np.full(n, 1.0 / n, dtype=np.float32))

    def contains(self, x: Any) -> bool:
        return isinstance(x, (int, np.integer)) and 0 <= x < self.n

    @property
    def shape(self) -> tuple[int, ...]:
        return ()

    def __repr__(self) -> str:
        return f"Discrete({self.n})"


class Box(Space):
    """A bounded continuous space backed by a :class:`Uniform` prior."""

    def __init__(
        self,
        low: float | np.ndarray,
        high: float | np.ndarray,
        shape: tuple[int, ...] | None = None,
    ) -> None:
        if shape is not None:
            self.low = np.full(shape, low, dtype=np.float32)
            self.high = np.full(shape, high, dtype=np.float32)
        else:
            self.low = np.asarray(low, dtype=np.float32)
            self.high = np.asarray(high, dtype=np.float32)
        if np.any(self.high <= self.low):
            raise ValueError("Box bounds must satisfy low < high element-wise")
        self._shape = self.low.shape
        self.distribution = Uniform(lower_bound=self.low, upper_bound=self.high)

    def contains(self, x: Any) -> bool:
        x = np.asarray(x)
        return bool(
            x.shape == self._shape and np.all(x >= self.low) and np.all(x <= self.high)
        )

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    def __repr__(self) -> str:
        return f"Box(low={self.low.tolist()}, high={self.high.tolist()})"
