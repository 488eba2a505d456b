"""Runs a batch of observations through an impact model."""

from typing import TYPE_CHECKING, Any, Dict, List, Sequence
import bittensor as bt

from impactkit.engine.models.impact_result import ImpactResult
from impactkit.engine.models.observation import Observation
from impactkit.engine.services.usage_transformer import transform_usage
from impactkit.engine.utils.error_handling import (
    ErrorMessages,
    InvalidInputError,
    log_and_raise_validation_error
)

if TYPE_CHECKING:
    from impactkit.engine.interfaces.impact_model import ImpactModel


def calculate_impacts(model: "ImpactModel", observations: Sequence[Dict[str, Any]]) -> List[ImpactResult]:
    """
    Calculate the impact of every observation with the given model.

    Observations are processed strictly one at a time in input order, so
    result i always belongs to observation i. The first failing observation
    aborts the whole batch.

    Args:
        model: A configured impact model
        observations: Ordered list of raw observation mappings

    Returns:
        One ImpactResult per observation, in input order

    Raises:
        InvalidInputError: If observations is not a list or tuple
        InvalidObservationError: If an observation lacks a required field
    """
    if not isinstance(observations, (list, tuple)):
        log_and_raise_validation_error(
            ErrorMessages.INVALID_OBSERVATIONS,
            data=observations,
            error_cls=InvalidInputError
        )

    results = []
    for raw in observations:
        observation = Observation.from_dict(raw, model.metric_type)
        usage = transform_usage(observation.duration, observation.metric, model.location)
        bt.logging.debug(
            f"{model.model_identifier()}: observation at {observation.datetime} -> {usage.to_dict()}"
        )
        results.append(model.fetch_data(usage))

    bt.logging.info(f"{model.model_identifier()}: calculated {len(results)} impacts")
    return results
