"""Data structures for collected experience.

Core types:
    - TrajectoryStep / Trajectory: append-only on-policy experience
    - ReplayTransition / ReplayBuffer: bounded off-policy experience
"""

from rlcore.dataprotocol.replay_buffer import ReplayBuffer, ReplayTransition
from rlcore.dataprotocol.trajectory import Trajectory, TrajectoryStep, stack

__all__ = [
    "ReplayBuffer",
    "ReplayTransition",
    "Trajectory",
    "TrajectoryStep",
    "stack",
]
