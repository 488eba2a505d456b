"""Data models for the impact engine."""

from .observation import Observation, UsageInput
from .impact_result import ImpactResult
from .plugin_config import RemoteModelConfig, ShellPluginConfig

__all__ = [
    "Observation",
    "UsageInput",
    "ImpactResult",
    "RemoteModelConfig",
    "ShellPluginConfig",
]
