"""Environment module.

Quick start::

    from rlcore.env import make

    env = make("GridWorld-v0", size=4)
    step = env.reset()
    step = env.step(1)
"""

from rlcore.env.base import Environment, InvalidActionError
from rlcore.env.grid_world import GridWorld
from rlcore.env.spaces import Box, Discrete, Space

# ---- Registry ----

_REGISTRY: dict[str, type[Environment]] = {
    "GridWorld-v0": GridWorld,
}


def register(name: str, cls: type[Environment]) -> None:
    """Register a custom environment class under *name*."""
    _REGISTRY[name] = cls


def make(name: str, **kwargs: object) -> Environment:
    """Create an environment by name."""
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY))
        raise KeyError(f"Unknown environment {name!r}. Available: {available}")
    return _REGISTRY[name](**kwargs)


__all__ = [
    "Box",
    "Discrete",
    "Environment",
    "GridWorld",
    "InvalidActionError",
    "Space",
    "make",
    "register",
]
