"""Abstract interface for metric aggregation strategies."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class MetricAggregator(ABC):
    """Abstract interface for metric aggregation strategies."""

    @abstractmethod
    def aggregate(
        self,
        records: List[Dict[str, Any]],
        metrics: List[str]
    ) -> Dict[str, float]:
        """Fold per-node records into a single record of aggregated metrics.

        Args:
            records: Ordered child-level records
            metrics: Metric names to aggregate; the result holds exactly these
        """
        pass
