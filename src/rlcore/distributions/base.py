"""Probability-law capabilities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

import jax
import jax.numpy as jnp

from rlcore.ops import softmax

ValueT = TypeVar("ValueT")


class Distribution(ABC, Generic[ValueT]):
    """Abstract probability distribution over values of type ``ValueT``."""

    @abstractmethod
    def log_probability(self, value: ValueT) -> Any:
        ...

    @abstractmethod
    def entropy(self) -> Any:
        ...

    @abstractmethod
    def mode(self) -> ValueT:
        """Return the mode of this distribution.

        Which mode is returned when there are several is up to the
        concrete distribution.
        """
        ...

    @abstractmethod
    def sample(self) -> ValueT:
        """Return a random sample drawn from this distribution."""
        ...

    def probability(self, value: ValueT) -> Any:
        return jnp.exp(self.log_probability(value))


class DiscreteDistribution(Distribution[int]):
    """Distribution over the integers ``{0, ..., n-1}``.

    Concrete subclasses are built from a probability vector (``__init__``)
    or from unnormalised logits (``from_logits``).
    """

    @abstractmethod
    def __init__(self, probabilities: jax.Array) -> None:
        ...

    @classmethod
    def from_logits(cls, logits: jax.Array, **kwargs: Any) -> DiscreteDistribution:
        return cls(softmax(logits), **kwargs)
