"""Environment interface.

An environment is the MDP boundary: it turns actions into steps.

Lifecycle::

    step = env.reset()              # Step(kind=FIRST, observation, reward=0.0)
    while step.kind != StepKind.LAST:
        step = env.step(action)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from rlcore.env.spaces import Space
from rlcore.types import Step


class InvalidActionError(ValueError):
    """Raised when an action lies outside the environment's action space."""


class Environment(ABC):
    """Abstract base class for all environments.

    Subclasses set ``observation_space`` and ``action_space`` and implement
    ``current_step``, ``step`` and ``reset``.
    """

    observation_space: Space
    action_space: Space

    @property
    @abstractmethod
    def current_step(self) -> Step:
        """The most recent step produced by this environment."""
        ...

    @abstractmethod
    def step(self, action: Any) -> Step:
        """Advance one timestep.

        Raises:
            InvalidActionError: if *action* is not in ``action_space``.
        """
        ...

    @abstractmethod
    def reset(self) -> Step:
        """Reset the environment and return a ``FIRST`` step with zero reward."""
        ...

    def check_action(self, action: Any) -> None:
        if not self.action_space.contains(action):
            raise InvalidActionError(
                f"Invalid action {action!r} for action space {self.action_space!r}"
            )

    @property
    def name(self) -> str:
        return self.__class__.__name__
