"""Small numeric helpers shared by distributions and agents."""

from __future__ import annotations

from collections.abc import Sequence

import jax
import jax.numpy as jnp
import numpy as np


def softmax(x: jax.Array | Sequence[float]) -> jax.Array:
    """Normalised exponentials along the last axis."""
    return jax.nn.softmax(jnp.asarray(x, dtype=jnp.float32), axis=-1)


def log_softmax(x: jax.Array | Sequence[float]) -> jax.Array:
    return jax.nn.log_softmax(jnp.asarray(x, dtype=jnp.float32), axis=-1)


def argmax(x: Sequence[float] | np.ndarray) -> int | None:
    """Index of the first maximum, or ``None`` for an empty sequence."""
    values = np.asarray(x)
    if values.size == 0:
        return None
    return int(np.argmax(values))


def argmin(x: Sequence[float] | np.ndarray) -> int | None:
    """Index of the first minimum, or ``None`` for an empty sequence."""
    values = np.asarray(x)
    if values.size == 0:
        return None
    return int(np.argmin(values))


def normalize(
    x: jax.Array, mask: jax.Array | None = None, eps: float = 1e-8
) -> jax.Array:
    """Z-score *x*.

    With *mask*, mean and standard deviation are taken over the positions
    where the mask is non-zero only.
    """
    if mask is None:
        return (x - jnp.mean(x)) / (jnp.std(x) + eps)
    mask = jnp.asarray(mask, dtype=x.dtype)
    count = jnp.maximum(jnp.sum(mask), 1.0)
    mean = jnp.sum(x * mask) / count
    std = jnp.sqrt(jnp.sum(jnp.square(x - mean) * mask) / count)
    return (x - mean) / (std + eps)
