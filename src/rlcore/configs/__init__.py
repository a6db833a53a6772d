"""Preset configuration registry for rlcore experiments."""

from rlcore.configs.presets import PRESETS, TrainConfig, algo_name, build_agent, cli

__all__ = [
    "PRESETS",
    "TrainConfig",
    "algo_name",
    "build_agent",
    "cli",
]
