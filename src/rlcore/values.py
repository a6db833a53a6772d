"""Discounted returns and advantage estimation.

All recursions run backwards in time through ``jax.lax.scan(reverse=True)``
so they can be traced inside a loss. Episode boundaries are honoured: the
value carried backwards is dropped at every ``LAST`` step, which keeps
several episodes concatenated in one buffer from leaking into each other.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import NamedTuple, Protocol

import chex
import jax
import jax.numpy as jnp
import numpy as np

from rlcore.types import StepKind, as_step_kinds


def _is_last(step_kinds: Sequence[StepKind] | np.ndarray) -> jax.Array:
    return jnp.asarray(as_step_kinds(step_kinds) == StepKind.LAST)


def discounted_returns(
    discount_factor: float,
    step_kinds: Sequence[StepKind] | np.ndarray,
    rewards: chex.Array | Sequence[float],
    final_value: chex.Array | float | None = None,
) -> jax.Array:
    """Compute discounted returns.

    Discounted returns are defined as
    ``Q_t = sum_{t'=t}^{T} gamma^{t'-t} * r_{t'} + gamma^{T-t+1} * final_value``,
    where ``r_t`` is the reward at step ``t`` and ``gamma`` the discount
    factor (Sutton & Barto, "Reinforcement Learning: An Introduction", 2nd
    edition).

    Steps whose kind is ``LAST`` reset the return carried backwards through
    time, so their return is their own reward.

    Args:
        discount_factor: Reward discount factor (``gamma``).
        step_kinds: Step kind of every step.
        rewards: Reward of every step.
        final_value: Value estimate after the final step, used to bootstrap
            the reward-to-go. Defaults to zero.

    Returns:
        Discounted returns in forward time order, shape ``(T,)``.
    """
    rewards = jnp.asarray(rewards, dtype=jnp.float32)
    is_last = _is_last(step_kinds)
    if rewards.shape[0] == 0:
        return rewards
    final = jnp.asarray(0.0 if final_value is None else final_value, dtype=jnp.float32)

    def _scan_fn(future_return, inputs):
        reward, last = inputs
        ret = reward + jnp.where(last, 0.0, discount_factor * future_return)
        return ret, ret

    _, returns = jax.lax.scan(_scan_fn, final, (rewards, is_last), reverse=True)
    return returns


class AdvantageEstimate(NamedTuple):
    """Advantage estimation result.

    Fields:
        advantages: Estimated advantages, typically used to train actors.
        discounted_returns: Accessor for the discounted returns computed
            alongside, typically used to train value networks.
    """

    advantages: jax.Array
    discounted_returns: Callable[[], jax.Array]


class AdvantageFunction(Protocol):
    """Strategy mapping a rollout and its value estimates to advantages."""

    def __call__(
        self,
        step_kinds: Sequence[StepKind] | np.ndarray,
        rewards: chex.Array,
        values: chex.Array,
        final_value: chex.Array | float,
    ) -> AdvantageEstimate:
        """
        Args:
            step_kinds: Step kind of every step.
            rewards: Reward obtained at every step.
            values: Value estimate of every step.
            final_value: Value estimate after the final step.
        """
        ...


class EmpiricalAdvantageEstimation:
    """Empirical advantage estimation.

    ``advantage[t] = returns[t] - values[t]`` with returns computed by
    :func:`discounted_returns`.
    """

    def __init__(self, discount_factor: float) -> None:
        self.discount_factor = discount_factor

    def __call__(self, step_kinds, rewards, values, final_value) -> AdvantageEstimate:
        returns = discounted_returns(
            self.discount_factor, step_kinds, rewards, final_value=final_value
        )
        advantages = returns - jnp.asarray(values, dtype=jnp.float32)
        return AdvantageEstimate(advantages=advantages, discounted_returns=lambda: returns)

    def __repr__(self) -> str:
        return f"EmpiricalAdvantageEstimation(discount_factor={self.discount_factor})"


class GeneralizedAdvantageEstimation:
    """Generalized advantage estimation.

    Schulman et al., "High-Dimensional Continuous Control Using Generalized
    Advantage Estimation", https://arxiv.org/abs/1506.02438.

    Args:
        discount_factor: Reward discount factor, between ``0.0`` and ``1.0``.
        discount_weight: Weight between ``0.0`` and ``1.0`` trading bias for
            variance in the temporal differences (``lambda``).
    """

    def __init__(self, discount_factor: float, discount_weight: float = 1.0) -> None:
        self.discount_factor = discount_factor
        self.discount_weight = discount_weight

    def __call__(self, step_kinds, rewards, values, final_value) -> AdvantageEstimate:
        gamma = self.discount_factor
        lam = self.discount_weight
        rewards = jnp.asarray(rewards, dtype=jnp.float32)
        values = jnp.asarray(values, dtype=jnp.float32)
        not_last = 1.0 - _is_last(step_kinds).astype(jnp.float32)
        final = jnp.asarray(final_value, dtype=jnp.float32)

        def _scan_fn(carry, inputs):
            gae, next_value = carry
            reward, value, keep = inputs
            delta = reward + gamma * next_value * keep - value
            gae = delta + lam * gamma * keep * gae
            return (gae, value), gae

        if rewards.shape[0] == 0:
            advantages = rewards
        else:
            init_carry = (jnp.zeros_like(final), final)
            _, advantages = jax.lax.scan(
                _scan_fn, init_carry, (rewards, values, not_last), reverse=True
            )
        returns = discounted_returns(gamma, step_kinds, rewards, final_value=final)
        return AdvantageEstimate(advantages=advantages, discounted_returns=lambda: returns)

    def __repr__(self) -> str:
        return (
            f"GeneralizedAdvantageEstimation(discount_factor={self.discount_factor}, "
            f"discount_weight={self.discount_weight})"
        )
