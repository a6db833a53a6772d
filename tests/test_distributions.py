"""Tests for rlcore.distributions."""

from __future__ import annotations

import math

import jax.numpy as jnp
import numpy as np
import pytest

from rlcore.distributions import Categorical, Uniform, exp_weighted_entropy, shannon_entropy
from rlcore.seeding import set_seed


class TestCategorical:
    def test_from_logits_is_softmax(self) -> None:
        dist = Categorical.from_logits([0.0, 0.0])
        np.testing.assert_allclose(np.asarray(dist.probabilities), [0.5, 0.5])

    def test_log_probability_and_probability(self) -> None:
        dist = Categorical([0.25, 0.75])
        assert float(dist.log_probability(1)) == pytest.approx(math.log(0.75))
        assert float(dist.probability(0)) == pytest.approx(0.25)

    def test_log_probability_batched(self) -> None:
        probs = jnp.array([[0.1, 0.9], [0.6, 0.4], [0.5, 0.5]])
        dist = Categorical(probs)
        log_probs = dist.log_probability(jnp.array([1, 0, 1]))
        np.testing.assert_allclose(
            np.asarray(log_probs), np.log([0.9, 0.6, 0.5]), rtol=1e-6
        )

    def test_log_probability_broadcasts_single_distribution(self) -> None:
        dist = Categorical([0.2, 0.8])
        log_probs = dist.log_probability(jnp.array([0, 1, 1]))
        np.testing.assert_allclose(np.asarray(log_probs), np.log([0.2, 0.8, 0.8]), rtol=1e-6)

    def test_default_entropy_is_exp_weighted(self) -> None:
        p = np.array([0.2, 0.8], dtype=np.float32)
        dist = Categorical(p)
        expected = float(np.sum(-p * np.exp(p)))
        assert float(dist.entropy()) == pytest.approx(expected, rel=1e-6)
        assert float(exp_weighted_entropy(jnp.asarray(p))) == pytest.approx(expected, rel=1e-6)

    def test_shannon_entropy_option(self) -> None:
        dist = Categorical([0.5, 0.5, 0.0], entropy_fn=shannon_entropy)
        assert float(dist.entropy()) == pytest.approx(math.log(2.0), rel=1e-6)

    def test_mode_first_maximum(self) -> None:
        assert Categorical([0.1, 0.45, 0.45]).mode() == 1

    def test_mode_random_tie_break(self) -> None:
        set_seed(0)
        dist = Categorical([0.1, 0.45, 0.45], random_tie_break=True)
        modes = {dist.mode() for _ in range(100)}
        assert modes == {1, 2}

    def test_sample_in_range(self) -> None:
        dist = Categorical([0.1, 0.2, 0.3, 0.4])
        for _ in range(1000):
            assert 0 <= dist.sample() < 4

    def test_degenerate_always_samples_support(self) -> None:
        dist = Categorical([0.0, 1.0])
        assert all(dist.sample() == 1 for _ in range(10_000))

    def test_sample_frequencies(self) -> None:
        set_seed(1)
        dist = Categorical([0.2, 0.8])
        draws = np.array([dist.sample() for _ in range(5000)])
        assert np.mean(draws == 1) == pytest.approx(0.8, abs=0.03)

    def test_unnormalised_weights(self) -> None:
        dist = Categorical([1.0, 3.0])
        draws = np.array([dist.sample() for _ in range(4000)])
        assert np.mean(draws == 1) == pytest.approx(0.75, abs=0.03)


class TestUniform:
    def test_log_probability_and_entropy(self) -> None:
        dist = Uniform(0.0, 4.0)
        assert float(dist.log_probability(1.0)) == pytest.approx(-math.log(4.0))
        assert float(dist.entropy()) == pytest.approx(math.log(4.0))

    def test_sample_in_bounds(self) -> None:
        dist = Uniform(-2.0, 3.0)
        for _ in range(1000):
            assert -2.0 <= dist.sample() < 3.0

    def test_mode_is_a_fresh_sample(self) -> None:
        set_seed(0)
        dist = Uniform(0.0, 1.0)
        modes = {dist.mode() for _ in range(10)}
        assert len(modes) > 1

    def test_array_bounds(self) -> None:
        dist = Uniform(np.zeros(3), np.full(3, 2.0))
        x = dist.sample()
        assert x.shape == (3,)
        assert float(dist.entropy()) == pytest.approx(3 * math.log(2.0), rel=1e-6)
