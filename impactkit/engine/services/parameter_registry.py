"""Registry of known parameters and how each one aggregates."""

from typing import Dict, List, Optional
import bittensor as bt

from impactkit.engine.utils.config import AGGREGATION_METHODS, DEFAULT_AGGREGATION_METHOD
from impactkit.engine.utils.error_handling import (
    ErrorMessages,
    log_and_raise_config_error
)


DEFAULT_PARAMETERS: Dict[str, str] = {
    "timestamp": "none",
    "duration": "sum",
    "e": "sum",
    "m": "sum",
    "energy": "sum",
    "cpu/energy": "sum",
    "memory/energy": "sum",
    "network/energy": "sum",
    "cpu/utilization": "avg",
    "memory/utilization": "avg",
    "carbon": "sum",
    "carbon-embodied": "sum",
    "carbon-operational": "sum",
    "grid/carbon-intensity": "avg",
    "resources-reserved": "none",
    "resources-total": "none",
    "functional-unit": "none",
    "sci": "sum",
}


class ParameterRegistry:
    """Maps parameter names to their aggregation method (sum, avg or none)."""

    def __init__(self, parameters: Optional[Dict[str, str]] = None, include_defaults: bool = True):
        self._methods: Dict[str, str] = {}
        if include_defaults:
            self._methods.update(DEFAULT_PARAMETERS)
        for name, method in (parameters or {}).items():
            self.register(name, method)

    def register(self, name: str, method: str):
        """Register or override the aggregation method of a parameter."""
        if method not in AGGREGATION_METHODS:
            log_and_raise_config_error(
                ErrorMessages.UNKNOWN_AGGREGATION_METHOD.format(method, name),
                config_key=name,
                config_value=method
            )
        self._methods[name] = method
        bt.logging.debug(f"Registered parameter '{name}' with aggregation method '{method}'")

    def get_aggregation_method(self, name: str) -> str:
        """Get the aggregation method for a parameter, falling back to sum."""
        method = self._methods.get(name)
        if method is None:
            bt.logging.warning(
                f"Aggregation method for parameter '{name}' not found, "
                f"using '{DEFAULT_AGGREGATION_METHOD}'"
            )
            return DEFAULT_AGGREGATION_METHOD
        return method

    def get_parameters(self) -> List[str]:
        """Get list of registered parameter names."""
        return list(self._methods.keys())

    def __len__(self) -> int:
        """Number of registered parameters."""
        return len(self._methods)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"ParameterRegistry({len(self._methods)} parameters)"
