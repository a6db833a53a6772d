"""Continuous uniform distribution."""

from __future__ import annotations

import numpy as np

from rlcore.distributions.base import Distribution
from rlcore.seeding import get_rng


class Uniform(Distribution[float]):
    """Uniform law on ``[lower_bound, upper_bound]``.

    Bounds may be scalars or equally shaped numpy arrays; with arrays the
    law is the element-wise product and the log-probability / entropy are
    summed over elements.

    ``mode()`` returns a fresh sample: every point of the support is a mode.
    """

    def __init__(
        self,
        lower_bound: float | np.ndarray = 0.0,
        upper_bound: float | np.ndarray = 1.0,
    ) -> None:
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound

    def _log_width(self) -> float:
        width = np.asarray(self.upper_bound, dtype=np.float64) - np.asarray(
            self.lower_bound, dtype=np.float64
        )
        return float(np.sum(np.log(width)))

    def log_probability(self, value: float | np.ndarray) -> float:
        return np.log(1.0) - self._log_width()

    def entropy(self) -> float:
        return self._log_width()

    def mode(self) -> float | np.ndarray:
        return self.sample()

    def sample(self) -> float | np.ndarray:
        value = get_rng().uniform(self.lower_bound, self.upper_bound)
        if np.ndim(value) == 0:
            return float(value)
        return value.astype(np.float32)

    def __repr__(self) -> str:
        return f"Uniform(lower_bound={self.lower_bound}, upper_bound={self.upper_bound})"
