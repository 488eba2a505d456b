"""Folds child-level metric records into a parent-level record."""

from typing import Any, Dict, List, Optional
import bittensor as bt

from ..interfaces.metric_aggregator import MetricAggregator
from .parameter_registry import ParameterRegistry
from impactkit.engine.utils.error_handling import (
    ErrorMessages,
    log_and_raise_aggregation_error
)


class MetricAggregationService(MetricAggregator):
    """Default implementation of metric aggregation (sum / avg per metric)."""

    def __init__(self, registry: Optional[ParameterRegistry] = None):
        self.registry = registry or ParameterRegistry()

    def _resolve_methods(self, metrics: List[str]) -> Dict[str, str]:
        """Resolve every metric's method; `none` can never be aggregated."""
        methods = {}
        for metric in metrics:
            method = self.registry.get_aggregation_method(metric)
            if method == "none":
                log_and_raise_aggregation_error(
                    ErrorMessages.INVALID_AGGREGATION_METHOD.format(method, metric),
                    metric=metric
                )
            methods[metric] = method
        return methods

    def aggregate(
        self,
        records: List[Dict[str, Any]],
        metrics: List[str]
    ) -> Dict[str, float]:
        """Aggregate the given metrics over records in a single left-to-right pass."""
        metrics = list(dict.fromkeys(metrics))
        methods = self._resolve_methods(metrics)

        totals: Dict[str, float] = {}
        for index, record in enumerate(records):
            for metric in metrics:
                if metric not in record:
                    log_and_raise_aggregation_error(
                        ErrorMessages.METRIC_MISSING.format(metric, index),
                        metric=metric,
                        index=index
                    )
                try:
                    value = float(record[metric])
                except (TypeError, ValueError):
                    log_and_raise_aggregation_error(
                        ErrorMessages.METRIC_NOT_NUMERIC.format(metric, index, record[metric]),
                        metric=metric,
                        index=index
                    )
                totals[metric] = totals.get(metric, 0.0) + value

        for metric, method in methods.items():
            if method == "avg" and records:
                totals[metric] /= len(records)

        bt.logging.debug(f"Aggregated {len(metrics)} metrics over {len(records)} records")
        return totals
