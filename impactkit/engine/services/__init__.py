"""Core services for the impact engine."""

from .usage_transformer import transform_usage, format_response
from .impact_calculation_service import calculate_impacts
from .parameter_registry import ParameterRegistry
from .metric_aggregation_service import MetricAggregationService

__all__ = [
    "transform_usage",
    "format_response",
    "calculate_impacts",
    "ParameterRegistry",
    "MetricAggregationService",
]
