"""Conversions between observations, provider usage blocks and canonical impacts."""

import math
from typing import Any, Mapping, Optional

from impactkit.engine.models.impact_result import ImpactResult
from impactkit.engine.models.observation import UsageInput
from impactkit.engine.utils.config import KG_TO_G, MJ_PER_KWH, PERCENT, SECONDS_PER_HOUR
from impactkit.engine.utils.error_handling import (
    ErrorMessages,
    RemoteEstimationError,
    log_and_raise_validation_error
)


def transform_usage(duration: float, metric: float, location: Optional[str] = None) -> UsageInput:
    """
    Convert a raw observation into the provider's usage block.

    Duration in seconds becomes hours of use; the 0..1 utilization becomes
    a workload percentage. No rounding is applied.
    """
    return UsageInput(
        hours_use_time=duration / SECONDS_PER_HOUR,
        time_workload=metric * PERCENT,
        usage_location=location,
    )


def _impact_value(impacts: Mapping[str, Any], criterion: str, phase: str) -> float:
    # Verbose responses wrap each figure as {"value": ..., "min": ..., "max": ...}
    try:
        value = impacts[criterion][phase]
        if isinstance(value, Mapping):
            value = value["value"]
        value = float(value)
    except (KeyError, TypeError, ValueError):
        log_and_raise_validation_error(
            ErrorMessages.UNRECOGNIZED_RESPONSE.format(f"no numeric {criterion}.{phase}"),
            data=impacts,
            error_cls=RemoteEstimationError
        )

    if not math.isfinite(value) or value < 0:
        log_and_raise_validation_error(
            ErrorMessages.NEGATIVE_IMPACT.format(f"{criterion}.{phase}", value),
            data=impacts,
            error_cls=RemoteEstimationError
        )
    return value


def format_response(body: Any) -> ImpactResult:
    """
    Extract the canonical impact from an estimation response body.

    Accepts both the nested shape ({"impacts": {"gwp": ..., "pe": ...}}) and
    the flat shape ({"gwp": ..., "pe": ...}). Manufacture GWP is reported in
    kgCO2eq and returned in grams; use-phase primary energy is reported in MJ
    and returned in kWh (1 kWh = 3.6 MJ).

    Raises:
        RemoteEstimationError: If neither shape is present
    """
    if isinstance(body, Mapping) and 'impacts' in body:
        impacts = body['impacts']
    elif isinstance(body, Mapping) and 'gwp' in body and 'pe' in body:
        impacts = body
    else:
        keys = sorted(body.keys()) if isinstance(body, Mapping) else type(body).__name__
        log_and_raise_validation_error(
            ErrorMessages.UNRECOGNIZED_RESPONSE.format(keys),
            data=body,
            error_cls=RemoteEstimationError
        )

    manufacture = _impact_value(impacts, 'gwp', 'manufacture')
    use = _impact_value(impacts, 'pe', 'use')

    return ImpactResult(e=use / MJ_PER_KWH, m=manufacture * KG_TO_G)
