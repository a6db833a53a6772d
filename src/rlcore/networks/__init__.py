from rlcore.networks.base import LossFn, Network, TargetNetwork
from rlcore.networks.config import NetworkConfig
from rlcore.networks.mlp import (
    MLP,
    ActorCriticNetwork,
    ActorCriticShared,
    ActorNetwork,
    EquinoxNetwork,
    QNetwork,
)

__all__ = [
    "MLP",
    "ActorCriticNetwork",
    "ActorCriticShared",
    "ActorNetwork",
    "EquinoxNetwork",
    "LossFn",
    "Network",
    "NetworkConfig",
    "QNetwork",
    "TargetNetwork",
]
