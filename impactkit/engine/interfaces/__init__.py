"""Core interfaces for the impact engine."""

from .impact_model import ImpactModel
from .metric_aggregator import MetricAggregator

__all__ = [
    "ImpactModel",
    "MetricAggregator",
]
