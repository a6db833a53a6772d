"""Tests for rlcore.env.spaces."""

from __future__ import annotations

import numpy as np
import pytest

from conftest import WorkoutEnvironment
from rlcore.distributions import Categorical, Uniform
from rlcore.env import Box, Discrete


class TestDiscrete:
    def test_contains(self) -> None:
        space = Discrete(4)
        assert space.contains(0)
        assert space.contains(np.int64(3))
        assert not space.contains(4)
        assert not space.contains(-1)
        assert not space.contains(1.5)

    def test_uniform_prior(self) -> None:
        space = Discrete(4)
        assert isinstance(space.distribution, Categorical)
        np.testing.assert_allclose(np.asarray(space.distribution.probabilities), [0.25] * 4)

    def test_samples_are_members(self) -> None:
        space = Discrete(3)
        assert all(space.contains(space.sample()) for _ in range(1000))

    def test_rejects_empty(self) -> None:
        with pytest.raises(ValueError):
            Discrete(0)


class TestBox:
    def test_shape_and_prior(self) -> None:
        space = Box(low=0.0, high=1.0, shape=(2,))
        assert space.shape == (2,)
        assert isinstance(space.distribution, Uniform)

    def test_contains(self) -> None:
        space = Box(low=-1.0, high=1.0, shape=(2,))
        assert space.contains(np.array([0.0, 1.0]))
        assert not space.contains(np.array([0.0, 1.5]))
        assert not space.contains(np.array([0.0]))

    def test_rejects_inverted_bounds(self) -> None:
        with pytest.raises(ValueError):
            Box(low=1.0, high=0.0, shape=(1,))

    def test_observation_samples_are_contained(self) -> None:
        space = WorkoutEnvironment().observation_space
        for _ in range(1000):
            assert space.contains(space.sample())
