"""Tests for rlcore.types step helpers and rlcore.dataprotocol.trajectory."""

from __future__ import annotations

import numpy as np
import pytest

from rlcore.dataprotocol import Trajectory, TrajectoryStep, stack
from rlcore.types import StepKind, complete_episode_mask, episode_count

T, L = StepKind.TRANSITION, StepKind.LAST


class TestStepKindHelpers:
    def test_episode_count(self) -> None:
        assert episode_count([T, L, T, T, L, T]) == 2
        assert episode_count([]) == 0

    def test_complete_episode_mask(self) -> None:
        np.testing.assert_array_equal(
            complete_episode_mask([T, L, T, L, T, T]), [1, 1, 1, 1, 0, 0]
        )

    def test_mask_without_completed_episode(self) -> None:
        np.testing.assert_array_equal(complete_episode_mask([T, T]), [0, 0])


class TestTrajectory:
    def _filled(self) -> Trajectory:
        traj = Trajectory()
        for i, kind in enumerate([T, T, L, T]):
            traj.append(kind, np.array([float(i), 0.0], dtype=np.float32), i, i % 2, -0.1)
        return traj

    def test_append_returns_entry(self) -> None:
        traj = Trajectory()
        entry = traj.append(T, np.zeros(2), None, 1, 0.5)
        assert isinstance(entry, TrajectoryStep)
        assert traj.current_step is entry
        assert len(traj) == 1

    def test_empty(self) -> None:
        traj = Trajectory()
        assert traj.current_step is None
        assert traj.num_episodes == 0
        with pytest.raises(ValueError):
            traj.observations

    def test_num_episodes(self) -> None:
        assert self._filled().num_episodes == 1

    def test_columnar_views(self) -> None:
        traj = self._filled()
        assert traj.observations.shape == (4, 2)
        np.testing.assert_array_equal(np.asarray(traj.actions), [0, 1, 0, 1])
        np.testing.assert_allclose(np.asarray(traj.rewards), [-0.1] * 4)
        np.testing.assert_array_equal(traj.step_kinds, [T, T, L, T])
        np.testing.assert_array_equal(np.asarray(traj.states), [0, 1, 2, 3])

    def test_agent_input(self) -> None:
        traj = self._filled()
        agent_input = traj.agent_input()
        assert agent_input.observation.shape == (4, 2)
        assert agent_input.state.shape == (4,)

    def test_none_states_stack_to_none(self) -> None:
        traj = Trajectory()
        traj.append(T, np.zeros(1), None, 0, 0.0)
        traj.append(L, np.ones(1), None, 1, 1.0)
        assert traj.states is None

    def test_iteration_and_indexing(self) -> None:
        traj = self._filled()
        assert [e.step_kind for e in traj] == [T, T, L, T]
        assert traj[2].step_kind == L

    def test_stack_pytrees(self) -> None:
        stacked = stack([{"a": 1.0, "b": np.zeros(2)}, {"a": 2.0, "b": np.ones(2)}])
        assert stacked["a"].shape == (2,)
        assert stacked["b"].shape == (2, 2)
