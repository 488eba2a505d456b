"""
Abstract interface for impact models.

An impact model turns usage observations into canonical impact results.
Variants (remote estimation service, external process, ...) implement every
method; shared behaviour lives in impactkit.engine.services and is composed,
not inherited.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

if TYPE_CHECKING:
    from impactkit.engine.models.impact_result import ImpactResult
    from impactkit.engine.models.observation import UsageInput


class ImpactModel(ABC):
    """Interface that all impact model variants must implement."""

    name: Optional[str]
    metric_type: str

    @abstractmethod
    def authenticate(self, credentials: Dict[str, Any]) -> None:
        """Store opaque credentials for the provider. No validation is done."""
        pass

    @abstractmethod
    def configure(self, name: str, static_params: Optional[Dict[str, Any]] = None) -> "ImpactModel":
        """
        Set the model name and capture its static parameters.

        Args:
            name: Model instance name
            static_params: Provider-specific configuration, fixed from here on

        Returns:
            The configured model, so calls can be chained

        Raises:
            ConfigurationError: If a required static parameter is missing
        """
        pass

    @abstractmethod
    def capture_static_params(self, static_params: Dict[str, Any]) -> Dict[str, Any]:
        """Validate static parameters and return the shared params to store."""
        pass

    @abstractmethod
    def fetch_data(self, usage: "UsageInput") -> "ImpactResult":
        """Turn one transformed usage block into an impact result."""
        pass

    @abstractmethod
    def calculate(self, observations: Sequence[Dict[str, Any]]) -> List["ImpactResult"]:
        """
        Compute the impact of every observation, preserving input order.

        Raises:
            InvalidInputError: If observations is not a sequence
            InvalidObservationError: If an observation lacks a required field
        """
        pass

    @abstractmethod
    def model_identifier(self) -> str:
        """Return the stable identifier of this model (e.g. 'org.boavizta.cpu.sci')."""
        pass

    @property
    @abstractmethod
    def location(self) -> Optional[str]:
        """Usage location from the static params, if any."""
        pass
