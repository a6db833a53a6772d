from __future__ import annotations

import numpy as np

from rlcore.env.base import Environment
from rlcore.env.spaces import Box, Discrete
from rlcore.types import Step, StepKind


class GridWorld(Environment):
    """
    Simple NxN grid world.

    Actions: 0=up, 1=right, 2=down, 3=left
    Observation: flat array of length 2 representing (row, col), normalized to [0,1].
    Reward: -0.01 per step, +1.0 on reaching the goal.

    An episode ends on reaching the goal or after ``max_steps`` steps.
    Stepping after a ``LAST`` step starts a new episode.
    """

    ACTIONS = {0: (-1, 0), 1: (0, 1), 2: (1, 0), 3: (0, -1)}

    def __init__(self, size: int = 5, max_steps: int = 100) -> None:
        self.size = size
        self.max_steps = max_steps
        self.action_space = Discrete(4)
        self.observation_space = Box(low=0.0, high=1.0, shape=(2,))
        self._agent_pos: tuple[int, int] = (0, 0)
        self._goal_pos: tuple[int, int] = (size - 1, size - 1)
        self._episode_steps = 0
        self._step = Step(kind=StepKind.FIRST, observation=self._get_obs(), reward=0.0)
        self.total_steps = 0
        self.total_reward = 0.0

    @property
    def current_step(self) -> Step:
        return self._step

    def reset(self) -> Step:
        self._agent_pos = (0, 0)
        self._episode_steps = 0
        self._step = Step(kind=StepKind.FIRST, observation=self._get_obs(), reward=0.0)
        return self._step

    def step(self, action: int) -> Step:
        self.check_action(action)
        if self._step.kind == StepKind.LAST:
            self.reset()

        dr, dc = self.ACTIONS[int(action)]
        r = max(0, min(self.size - 1, self._agent_pos[0] + dr))
        c = max(0, min(self.size - 1, self._agent_pos[1] + dc))
        self._agent_pos = (r, c)
        self._episode_steps += 1

        reached_goal = self._agent_pos == self._goal_pos
        truncated = self._episode_steps >= self.max_steps
        reward = 1.0 if reached_goal else -0.01
        kind = StepKind.LAST if reached_goal or truncated else StepKind.TRANSITION
        self._step = Step(kind=kind, observation=self._get_obs(), reward=reward)

        self.total_steps += 1
        self.total_reward += reward
        return self._step

    def _get_obs(self) -> np.ndarray:
        return np.array(
            [
                self._agent_pos[0] / max(1, self.size - 1),
                self._agent_pos[1] / max(1, self.size - 1),
            ],
            dtype=np.float32,
        )

    def render(self) -> str:
        rows = []
        for r in range(self.size):
            row = ""
            for c in range(self.size):
                if (r, c) == self._agent_pos:
                    row += "A "
                elif (r, c) == self._goal_pos:
                    row += "G "
                else:
                    row += ". "
            rows.append(row)
        return "\n".join(rows)
