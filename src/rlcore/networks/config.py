"""Network hyperparameters."""

from __future__ import annotations

from dataclasses import dataclass

import optax


@dataclass(frozen=True)
class NetworkConfig:
    """Architecture and optimiser settings for the reference MLP networks."""

    hidden_sizes: tuple[int, ...] = (64, 64)

    # Optimization
    lr: float = 1e-3
    max_grad_norm: float = 10.0

    def make_optimizer(self) -> optax.GradientTransformation:
        """Build the optax optimizer chain for this config.

        Construct it once per network so that optimizer state persists
        across ``update()`` calls.
        """
        return optax.chain(
            optax.clip_by_global_norm(self.max_grad_norm),
            optax.adam(self.lr),
        )
