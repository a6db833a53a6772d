"""Categorical distribution over action indices."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import jax
import jax.numpy as jnp
import numpy as np
from jax.scipy.special import xlogy

from rlcore.distributions.base import DiscreteDistribution
from rlcore.seeding import get_rng

EntropyFn = Callable[[jax.Array], jax.Array]


def exp_weighted_entropy(probabilities: jax.Array) -> jax.Array:
    """``sum(-p * exp(p))`` over the category axis.

    This is the historical entropy rule of :class:`Categorical`. It is not
    the Shannon entropy; use :func:`shannon_entropy` for that.
    """
    return jnp.sum(-(probabilities * jnp.exp(probabilities)), axis=-1)


def shannon_entropy(probabilities: jax.Array) -> jax.Array:
    """``-sum(p * log(p))`` over the category axis, with ``0 log 0 = 0``."""
    return -jnp.sum(xlogy(probabilities, probabilities), axis=-1)


class Categorical(DiscreteDistribution):
    """Distribution over ``{0, ..., n-1}`` given by a probability vector.

    ``probabilities`` may carry leading batch axes (one distribution per
    row, as produced by a network evaluated on a whole trajectory);
    ``log_probability`` and ``entropy`` are vectorised over them while
    ``mode`` and ``sample`` expect a single vector.

    Args:
        probabilities: Non-negative weights, trailing axis = categories.
        entropy_fn: Rule used by :meth:`entropy`. Defaults to
            :func:`exp_weighted_entropy`.
        random_tie_break: If True, :meth:`mode` picks uniformly among tied
            maximisers instead of returning the first one.
    """

    def __init__(
        self,
        probabilities: jax.Array | Sequence[float],
        *,
        entropy_fn: EntropyFn = exp_weighted_entropy,
        random_tie_break: bool = False,
    ) -> None:
        self.probabilities = jnp.asarray(probabilities, dtype=jnp.float32)
        self.entropy_fn = entropy_fn
        self.random_tie_break = random_tie_break

    @property
    def num_categories(self) -> int:
        return self.probabilities.shape[-1]

    def log_probability(self, value: int | jax.Array) -> jax.Array:
        index = jnp.asarray(value, dtype=jnp.int32)
        probs = self.probabilities
        if index.ndim == 0 and probs.ndim == 1:
            return jnp.log(probs[index])
        probs = jnp.broadcast_to(probs, index.shape + probs.shape[-1:])
        picked = jnp.take_along_axis(probs, index[..., None], axis=-1)[..., 0]
        return jnp.log(picked)

    def entropy(self) -> jax.Array:
        return self.entropy_fn(self.probabilities)

    def mode(self) -> int:
        probs = np.asarray(self.probabilities)
        if self.random_tie_break:
            best = np.flatnonzero(probs == probs.max())
            return int(get_rng().choice(best))
        return int(np.argmax(probs))

    def sample(self) -> int:
        probs = np.asarray(self.probabilities).tolist()
        total = float(sum(probs))
        # Random number in the range 0.0 <= rnd < total.
        rnd = get_rng().uniform(0.0, total)
        accum = 0.0
        for i, p in enumerate(probs):
            accum += p
            if rnd < accum:
                return i
        # Reached only through floating point inaccuracies.
        return len(probs) - 1

    def __repr__(self) -> str:
        return f"Categorical(probabilities={np.asarray(self.probabilities).tolist()})"
