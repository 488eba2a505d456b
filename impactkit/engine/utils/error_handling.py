"""
Error taxonomy and handling utilities for the impact engine.

All engine errors derive from ImpactError. The log_and_raise_* helpers
standardize how an error is logged with its context before it propagates
to the caller.
"""

import bittensor as bt
from typing import Any, Dict, Optional, Sequence


class ImpactError(Exception):
    """Base class for all impact engine errors."""


class ConfigurationError(ImpactError):
    """Required static parameter missing, or model used before configure."""


class InvalidInputError(ImpactError):
    """calculate() was called with something other than a sequence."""


class InvalidObservationError(ImpactError):
    """An observation lacks datetime, duration or the expected metric."""


class ProcessExecutionError(ImpactError):
    """An external plugin process failed to spawn, exited badly or produced unparsable output."""


class AggregationError(ImpactError):
    """A metric cannot be aggregated across the given records."""


class RemoteEstimationError(ImpactError):
    """The remote estimation service failed or returned an unrecognized body."""


SENSITIVE_KEYS = ('api_key', 'token', 'password', 'secret', 'authorization')


def _sanitize(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not params:
        return {}
    return {k: v for k, v in params.items() if k.lower() not in SENSITIVE_KEYS}


def log_and_raise_api_error(
    error: Exception,
    endpoint: str,
    params: Optional[Dict[str, Any]] = None,
    context: str = "Estimation request"
) -> None:
    """
    Log remote service error with context and raise RemoteEstimationError.

    Args:
        error: The original exception
        endpoint: Endpoint that failed
        params: Request parameters (will be sanitized)
        context: Additional context for the error

    Raises:
        RemoteEstimationError: Always raises with formatted message
    """
    bt.logging.error(
        f"{context} failed: {error}",
        extra={
            'endpoint': endpoint,
            'params': _sanitize(params),
            'error_type': type(error).__name__
        }
    )

    raise RemoteEstimationError(f"{context} failed for {endpoint}: {error}") from error


def log_and_raise_validation_error(
    message: str,
    data: Optional[Any] = None,
    error_cls: type = InvalidObservationError
) -> None:
    """
    Log validation error and raise it as error_cls.

    Large data is truncated before logging.
    """
    safe_data = data
    if data is not None and len(str(data)) > 200:
        safe_data = str(data)[:200] + "... (truncated)"

    bt.logging.error(
        f"Validation failed: {message}",
        extra={'validation_data': safe_data}
    )

    raise error_cls(message)


def log_and_raise_process_error(
    error: Any,
    command: Sequence[str],
    context: Optional[Dict[str, Any]] = None
) -> None:
    """
    Log external process failure and raise ProcessExecutionError.

    Args:
        error: The original exception or a failure description
        command: Executable and argv that were run
        context: Additional context information (exit code, stderr, ...)

    Raises:
        ProcessExecutionError: Always raises, carrying the underlying message
    """
    bt.logging.error(
        f"External process {' '.join(command)!r} failed: {error}",
        extra={
            'command': list(command),
            'context': context,
            'error_type': type(error).__name__
        }
    )

    if isinstance(error, BaseException):
        raise ProcessExecutionError(str(error)) from error
    raise ProcessExecutionError(str(error))


def log_and_raise_config_error(
    message: str,
    config_key: Optional[str] = None,
    config_value: Optional[Any] = None
) -> None:
    """
    Log configuration error and raise ConfigurationError.

    Args:
        message: Error message describing the configuration issue
        config_key: The configuration key that's problematic
        config_value: The problematic value (will be sanitized)

    Raises:
        ConfigurationError: Always raises with formatted message
    """
    safe_value = config_value
    if config_value is not None and any(sensitive in str(config_key).lower()
                                        for sensitive in ['key', 'token', 'password', 'secret']):
        safe_value = '***REDACTED***'

    bt.logging.error(
        f"Configuration error: {message}",
        extra={'config_key': config_key, 'config_value': safe_value}
    )

    if config_key is None:
        raise ConfigurationError(message)
    raise ConfigurationError(f"{message} (config_key: {config_key})")


def log_and_raise_aggregation_error(
    message: str,
    metric: Optional[str] = None,
    index: Optional[int] = None
) -> None:
    """Log aggregation failure and raise AggregationError."""
    bt.logging.error(
        f"Aggregation failed: {message}",
        extra={'metric': metric, 'index': index}
    )
    raise AggregationError(message)


# Standard error messages for consistency
class ErrorMessages:
    """Standard error messages and message templates."""

    # Configuration errors
    MISSING_PARAMETER = "Improper configure: Missing {} parameter"
    NOT_CONFIGURED = "Improper configure: Missing configuration parameters"
    UNSUPPORTED_COMPONENT = "Unsupported component type '{}'"
    UNKNOWN_AGGREGATION_METHOD = "Unknown aggregation method '{}' for parameter '{}'"

    # Input errors
    INVALID_OBSERVATIONS = "Parameter Not Given: invalid observations parameter. Expecting an array of observations"
    INVALID_OBSERVATION = "Invalid Input: observation is missing '{}'"
    INVALID_OBSERVATION_VALUE = "Invalid Input: observation field '{}' must be numeric, got {!r}"

    # Remote service errors
    UNRECOGNIZED_RESPONSE = "Unrecognized estimation response: expected 'impacts' or 'gwp'/'pe' keys, got {}"
    NEGATIVE_IMPACT = "Estimation response contains a negative or non-finite impact: {}={}"

    # Process errors
    PROCESS_EXIT = "Process exited with code {}: {}"
    PROCESS_TIMEOUT = "Process timed out after {}s"
    PROCESS_INPUT = "Unable to serialize process input: {}"
    PROCESS_OUTPUT = "Unable to parse process output: {}"
    PROCESS_NO_RESULT = "Process returned no usable impact record: {}"

    # Aggregation errors
    INVALID_AGGREGATION_METHOD = "Aggregation is not possible for given method '{}' of metric '{}'"
    METRIC_MISSING = "Aggregation metric '{}' is not found in inputs[{}]"
    METRIC_NOT_NUMERIC = "Aggregation metric '{}' in inputs[{}] is not numeric: {!r}"
