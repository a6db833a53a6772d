"""Random number management.

Two sources of randomness are used across the library:

- A shared ``numpy.random.Generator`` drives everything that happens in
  the Python-side interaction loop: distribution sampling, space
  sampling, epsilon-greedy draws and replay-buffer sampling.
- Explicit JAX PRNG keys are used for network parameter initialisation.

Usage::

    from rlcore.seeding import make_key, set_seed, split_keys

    set_seed(42)                      # reproducible interaction loop
    key = make_key(42)
    key, actor_key, critic_key = split_keys(key, n=2)
"""

from __future__ import annotations

import jax
import numpy as np

_RNG: np.random.Generator = np.random.default_rng()


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create an independent numpy ``Generator`` from *seed*."""
    return np.random.default_rng(seed)


def set_seed(seed: int | None) -> np.random.Generator:
    """Reseed the shared generator and return it."""
    global _RNG
    _RNG = make_rng(seed)
    return _RNG


def get_rng() -> np.random.Generator:
    """Return the shared generator used by the interaction loop."""
    return _RNG


def make_key(seed: int) -> jax.Array:
    """Create a JAX PRNG key from an integer seed."""
    return jax.random.PRNGKey(seed)


def split_keys(key: jax.Array, n: int) -> tuple[jax.Array, ...]:
    """Split *key* into ``n + 1`` keys.

    Returns ``(new_key, key_1, ..., key_n)``; the first element is the
    continuation key.
    """
    keys = jax.random.split(key, n + 1)
    return tuple(keys)  # type: ignore[return-value]
