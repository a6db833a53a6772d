"""Tests for rlcore.networks (Equinox reference networks)."""

from __future__ import annotations

import asyncio

import jax
import jax.numpy as jnp
import numpy as np
import optax
import pytest

from conftest import ScriptedActorNetwork
from rlcore.distributions import Categorical
from rlcore.networks import (
    ActorCriticNetwork,
    ActorNetwork,
    Network,
    NetworkConfig,
    QNetwork,
    TargetNetwork,
)
from rlcore.seeding import make_key
from rlcore.types import AgentInput

CONFIG = NetworkConfig(hidden_sizes=(16, 16), lr=1e-2)


def _leaves(network) -> list[np.ndarray]:
    return [np.asarray(x) for x in jax.tree.leaves(network.model)]


class TestProtocols:
    def test_equinox_networks_satisfy_protocols(self) -> None:
        net = QNetwork(2, 3, CONFIG, key=make_key(0))
        assert isinstance(net, Network)
        assert isinstance(net, TargetNetwork)

    def test_scripted_network_is_a_network(self) -> None:
        assert isinstance(ScriptedActorNetwork([0.5, 0.5]), Network)

    def test_make_optimizer(self) -> None:
        assert isinstance(CONFIG.make_optimizer(), optax.GradientTransformation)


class TestForward:
    def test_actor_single_and_batched(self) -> None:
        net = ActorNetwork(2, 3, CONFIG, key=make_key(0))
        single = asyncio.run(net.prediction(AgentInput(np.zeros(2, np.float32), "s")))
        assert isinstance(single.action_distribution, Categorical)
        assert single.action_distribution.probabilities.shape == (3,)
        assert float(jnp.sum(single.action_distribution.probabilities)) == pytest.approx(1.0, abs=1e-5)
        assert single.state == "s"

        batched = asyncio.run(net.prediction(AgentInput(np.zeros((5, 2), np.float32), None)))
        assert batched.action_distribution.probabilities.shape == (5, 3)

    def test_actor_critic_value_shapes(self) -> None:
        net = ActorCriticNetwork(2, 4, CONFIG, key=make_key(1))
        single = asyncio.run(net.prediction(AgentInput(np.zeros(2, np.float32), None)))
        assert single.value.shape == ()
        batched = asyncio.run(net.prediction(AgentInput(np.zeros((6, 2), np.float32), None)))
        assert batched.value.shape == (6,)
        assert batched.action_distribution.probabilities.shape == (6, 4)

    def test_q_values_shape(self) -> None:
        net = QNetwork(3, 2, CONFIG, key=make_key(2))
        out = asyncio.run(net.prediction(AgentInput(np.ones((4, 3), np.float32), None)))
        assert out.q_values.shape == (4, 2)


class TestUpdate:
    def test_update_minimises_loss(self) -> None:
        net = QNetwork(2, 2, CONFIG, key=make_key(0))
        obs = np.random.default_rng(0).normal(size=(8, 2)).astype(np.float32)
        input = AgentInput(obs, None)

        def loss_fn(output):
            return jnp.mean(jnp.square(output.q_values - 1.0))

        losses = [asyncio.run(net.update(input, loss_fn)) for _ in range(50)]
        assert isinstance(losses[0], float)
        assert losses[-1] < losses[0]

    def test_copy_is_independent(self) -> None:
        net = QNetwork(2, 2, CONFIG, key=make_key(0))
        clone = net.copy()
        for a, b in zip(_leaves(net), _leaves(clone)):
            np.testing.assert_array_equal(a, b)

        input = AgentInput(np.ones((2, 2), np.float32), None)
        asyncio.run(net.update(input, lambda out: jnp.sum(out.q_values)))

        assert any(not np.allclose(a, b) for a, b in zip(_leaves(net), _leaves(clone)))

    def test_soft_update(self) -> None:
        online = QNetwork(2, 2, CONFIG, key=make_key(0))
        target = QNetwork(2, 2, CONFIG, key=make_key(1))
        before = _leaves(target)

        target.soft_update(online, 0.25)
        for b, o, t in zip(before, _leaves(online), _leaves(target)):
            np.testing.assert_allclose(t, 0.25 * o + 0.75 * b, rtol=1e-5, atol=1e-6)

        target.soft_update(online, 1.0)
        for o, t in zip(_leaves(online), _leaves(target)):
            np.testing.assert_allclose(t, o)
