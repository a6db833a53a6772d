"""Network contract consumed by agents.

Agents never compute gradients themselves. They hand a network the input
and a loss function; the network runs its forward pass, feeds the output to
the loss function and minimises the returned scalar however it sees fit.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar, runtime_checkable

import chex

from rlcore.types import AgentInput

OutputT = TypeVar("OutputT")

LossFn = Callable[[OutputT], chex.Array]


@runtime_checkable
class Network(Protocol[OutputT]):
    """Structural typing protocol for an agent's function approximator.

    Calls from one agent to one network are strictly sequential.
    """

    async def prediction(self, input: AgentInput) -> OutputT:
        """Forward pass without side effects on the parameters."""
        ...

    async def update(self, input: AgentInput, loss_fn: LossFn) -> float:
        """Minimise ``loss_fn(forward(input))`` and return the loss value.

        Args:
            input: Network input, possibly batched along a leading axis.
            loss_fn: Maps the forward output to a scalar loss array.

        Returns:
            The loss evaluated before the parameter update.
        """
        ...


@runtime_checkable
class TargetNetwork(Network[OutputT], Protocol[OutputT]):
    """A network that can serve as its own slowly-tracking copy."""

    def copy(self) -> TargetNetwork[OutputT]:
        """Independent copy with identical parameters."""
        ...

    def soft_update(self, source: TargetNetwork[OutputT], forget_factor: float) -> None:
        """Move parameters towards *source*.

        ``params = forget_factor * source + (1 - forget_factor) * params``;
        a forget factor of ``1.0`` is a hard copy.
        """
        ...
