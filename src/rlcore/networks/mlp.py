"""Reference networks implemented with Equinox and trained with Optax.

Three variants, all honouring the :class:`~rlcore.networks.base.Network`
contract:

- ``ActorNetwork``: obs -> categorical action distribution
- ``ActorCriticNetwork``: shared backbone -> (action distribution, value)
- ``QNetwork``: obs -> Q(s, a) for each discrete action

Observations with a leading axis are evaluated with ``jax.vmap``. The
recurrent state of the input is passed through unchanged.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import equinox as eqx
import jax
import jax.numpy as jnp
import optax

from rlcore.distributions import Categorical
from rlcore.networks.base import LossFn
from rlcore.networks.config import NetworkConfig
from rlcore.types import ActorCriticOutput, ActorOutput, AgentInput, QNetworkOutput


class MLP(eqx.Module):
    """Plain MLP: ``in_dim -> hidden_sizes -> out_dim``."""

    layers: list
    activation: Callable = eqx.field(static=True)

    def __init__(
        self,
        in_dim: int,
        out_dim: int,
        hidden_sizes: tuple[int, ...] = (64, 64),
        activation: Callable = jax.nn.relu,
        *,
        key: jax.Array,
    ) -> None:
        dims = [in_dim, *hidden_sizes, out_dim]
        keys = jax.random.split(key, len(dims) - 1)
        self.layers = [
            eqx.nn.Linear(d_in, d_out, key=k)
            for d_in, d_out, k in zip(dims[:-1], dims[1:], keys)
        ]
        self.activation = activation

    def __call__(self, x: jax.Array) -> jax.Array:
        for layer in self.layers[:-1]:
            x = self.activation(layer(x))
        return self.layers[-1](x)


class ActorCriticShared(eqx.Module):
    """Shared-backbone actor-critic: obs -> (logits, value)."""

    backbone: MLP
    actor_head: eqx.nn.Linear
    critic_head: eqx.nn.Linear

    def __init__(
        self,
        obs_dim: int,
        n_actions: int,
        hidden_sizes: tuple[int, ...] = (64, 64),
        *,
        key: jax.Array,
    ) -> None:
        k_backbone, k_actor, k_critic = jax.random.split(key, 3)
        self.backbone = MLP(
            obs_dim, hidden_sizes[-1], hidden_sizes[:-1], jax.nn.tanh, key=k_backbone
        )
        self.actor_head = eqx.nn.Linear(hidden_sizes[-1], n_actions, key=k_actor)
        self.critic_head = eqx.nn.Linear(hidden_sizes[-1], 1, key=k_critic)

    def __call__(self, x: jax.Array) -> tuple[jax.Array, jax.Array]:
        x = jax.nn.tanh(self.backbone(x))
        return self.actor_head(x), self.critic_head(x).squeeze(-1)


def _apply(model: Callable, observation: Any) -> Any:
    x = jnp.asarray(observation, dtype=jnp.float32)
    if x.ndim > 1:
        return jax.vmap(model)(x)
    return model(x)


class EquinoxNetwork(ABC):
    """Holds an Equinox model and its Optax optimizer state.

    Subclasses implement ``_forward(model, input)`` to build the typed
    output; gradients are taken with respect to the model only.
    """

    def __init__(self, model: eqx.Module, optimizer: optax.GradientTransformation) -> None:
        self.model = model
        self.optimizer = optimizer
        self.opt_state = optimizer.init(eqx.filter(model, eqx.is_array))

    @abstractmethod
    def _forward(self, model: eqx.Module, input: AgentInput) -> Any:
        ...

    async def prediction(self, input: AgentInput) -> Any:
        return self._forward(self.model, input)

    async def update(self, input: AgentInput, loss_fn: LossFn) -> float:
        def _loss(model):
            return loss_fn(self._forward(model, input))

        loss, grads = eqx.filter_value_and_grad(_loss)(self.model)
        updates, self.opt_state = self.optimizer.update(
            grads, self.opt_state, eqx.filter(self.model, eqx.is_array)
        )
        self.model = eqx.apply_updates(self.model, updates)
        return float(loss)

    def copy(self) -> EquinoxNetwork:
        clone = copy.copy(self)
        arrays, static = eqx.partition(self.model, eqx.is_array)
        clone.model = eqx.combine(jax.tree.map(jnp.array, arrays), static)
        clone.opt_state = self.optimizer.init(eqx.filter(clone.model, eqx.is_array))
        return clone

    def soft_update(self, source: EquinoxNetwork, forget_factor: float) -> None:
        target, static = eqx.partition(self.model, eqx.is_array)
        online = eqx.filter(source.model, eqx.is_array)
        mixed = jax.tree.map(
            lambda t, s: forget_factor * s + (1.0 - forget_factor) * t, target, online
        )
        self.model = eqx.combine(mixed, static)


class ActorNetwork(EquinoxNetwork):
    """Policy network producing a :class:`Categorical` over actions."""

    def __init__(
        self,
        obs_dim: int,
        n_actions: int,
        config: NetworkConfig = NetworkConfig(),
        *,
        key: jax.Array,
    ) -> None:
        model = MLP(obs_dim, n_actions, config.hidden_sizes, jax.nn.tanh, key=key)
        super().__init__(model, config.make_optimizer())

    def _forward(self, model: eqx.Module, input: AgentInput) -> ActorOutput:
        logits = _apply(model, input.observation)
        return ActorOutput(
            action_distribution=Categorical.from_logits(logits),
            state=input.state,
        )


class ActorCriticNetwork(EquinoxNetwork):
    """Shared-backbone policy and value network."""

    def __init__(
        self,
        obs_dim: int,
        n_actions: int,
        config: NetworkConfig = NetworkConfig(),
        *,
        key: jax.Array,
    ) -> None:
        model = ActorCriticShared(obs_dim, n_actions, config.hidden_sizes, key=key)
        super().__init__(model, config.make_optimizer())

    def _forward(self, model: eqx.Module, input: AgentInput) -> ActorCriticOutput:
        logits, value = _apply(model, input.observation)
        return ActorCriticOutput(
            action_distribution=Categorical.from_logits(logits),
            value=value,
            state=input.state,
        )


class QNetwork(EquinoxNetwork):
    """Q-value network for discrete action spaces."""

    def __init__(
        self,
        obs_dim: int,
        n_actions: int,
        config: NetworkConfig = NetworkConfig(),
        *,
        key: jax.Array,
    ) -> None:
        model = MLP(obs_dim, n_actions, config.hidden_sizes, jax.nn.relu, key=key)
        super().__init__(model, config.make_optimizer())

    def _forward(self, model: eqx.Module, input: AgentInput) -> QNetworkOutput:
        return QNetworkOutput(q_values=_apply(model, input.observation), state=input.state)
