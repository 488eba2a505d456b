"""Observation and usage models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from impactkit.engine.utils.error_handling import (
    ErrorMessages,
    log_and_raise_validation_error
)


REQUIRED_OBSERVATION_FIELDS = ("datetime", "duration")


def _as_number(key: str, value: Any) -> float:
    if isinstance(value, bool):
        log_and_raise_validation_error(
            ErrorMessages.INVALID_OBSERVATION_VALUE.format(key, value)
        )
    try:
        return float(value)
    except (TypeError, ValueError):
        log_and_raise_validation_error(
            ErrorMessages.INVALID_OBSERVATION_VALUE.format(key, value)
        )


@dataclass(frozen=True)
class Observation:
    """
    A single time-bucketed usage observation.

    `metric` holds the utilization fraction (0..1) read from the field named
    after the model's metric type. Fields other than datetime, duration and
    the metric are kept untouched in `extra`.
    """
    datetime: Any
    duration: float
    metric_type: str
    metric: float
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], metric_type: str) -> 'Observation':
        """
        Validate a raw observation mapping.

        Raises:
            InvalidObservationError: If datetime, duration or the metric
                field is missing, or a numeric field is not a number
        """
        if not isinstance(data, Mapping):
            log_and_raise_validation_error(
                ErrorMessages.INVALID_OBSERVATION.format("datetime"), data=data
            )

        for key in REQUIRED_OBSERVATION_FIELDS + (metric_type,):
            if key not in data:
                log_and_raise_validation_error(
                    ErrorMessages.INVALID_OBSERVATION.format(key), data=data
                )

        known = set(REQUIRED_OBSERVATION_FIELDS) | {metric_type}
        return cls(
            datetime=data["datetime"],
            duration=_as_number("duration", data["duration"]),
            metric_type=metric_type,
            metric=_as_number(metric_type, data[metric_type]),
            extra={k: v for k, v in data.items() if k not in known},
        )


@dataclass(frozen=True)
class UsageInput:
    """Usage block in the shape the estimation provider expects."""
    hours_use_time: float
    time_workload: float
    usage_location: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        usage = {
            "hours_use_time": self.hours_use_time,
            "time_workload": self.time_workload,
        }
        if self.usage_location is not None:
            usage["usage_location"] = self.usage_location
        return usage
