"""Tests for rlcore.seeding."""

from __future__ import annotations

import jax.numpy as jnp

from rlcore.seeding import get_rng, make_key, make_rng, set_seed, split_keys


class TestSharedGenerator:
    def test_set_seed_is_reproducible(self) -> None:
        set_seed(7)
        a = get_rng().random(5)
        set_seed(7)
        b = get_rng().random(5)
        assert (a == b).all()

    def test_set_seed_returns_shared_generator(self) -> None:
        rng = set_seed(3)
        assert rng is get_rng()

    def test_make_rng_is_independent(self) -> None:
        set_seed(0)
        shared = get_rng()
        local = make_rng(0)
        assert local is not shared


class TestKeys:
    def test_make_key_deterministic(self) -> None:
        assert jnp.array_equal(make_key(42), make_key(42))
        assert not jnp.array_equal(make_key(0), make_key(1))

    def test_split_keys_returns_n_plus_1(self) -> None:
        keys = split_keys(make_key(0), n=3)
        assert len(keys) == 4
