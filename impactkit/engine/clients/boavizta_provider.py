"""
Boavizta impact model.

Implements the ImpactModel interface on top of the Boavizta component API.
"""
import requests
from typing import Any, Dict, List, Optional, Sequence
import bittensor as bt

from impactkit.engine.interfaces.impact_model import ImpactModel
from impactkit.engine.models.impact_result import ImpactResult
from impactkit.engine.models.observation import UsageInput
from impactkit.engine.models.plugin_config import RemoteModelConfig
from impactkit.engine.services.impact_calculation_service import calculate_impacts
from impactkit.engine.services.usage_transformer import format_response
from impactkit.engine.utils.config import (
    BOAVIZTA_API_URL,
    BOAVIZTA_COMPONENT_ENDPOINT,
    BOAVIZTA_COUNTRY_CODE_ENDPOINT,
    COMPONENT_COUNT_FIELDS,
    DEFAULT_ALLOCATION,
    REQUEST_TIMEOUT
)
from impactkit.engine.utils.error_handling import (
    ErrorMessages,
    log_and_raise_api_error,
    log_and_raise_config_error
)


class BoaviztaProvider(ImpactModel):
    """
    Boavizta implementation of impact estimation for a single component type.

    Each transformed usage block is posted to the component endpoint together
    with the static component description; the response is normalized to
    kWh and gCO2eq.
    """

    def __init__(self, component_type: str = "cpu", metric_type: Optional[str] = None,
                 api_url: str = BOAVIZTA_API_URL, allocation: str = DEFAULT_ALLOCATION,
                 timeout: float = REQUEST_TIMEOUT):
        """
        Initialize Boavizta provider.

        Args:
            component_type: Boavizta component endpoint (cpu, ram or gpu)
            metric_type: Observation field holding utilization (default: component_type)
            api_url: Base URL of the Boavizta API
            allocation: Embodied impact allocation policy (default: LINEAR)
            timeout: HTTP timeout in seconds
        """
        if component_type not in COMPONENT_COUNT_FIELDS:
            log_and_raise_config_error(
                ErrorMessages.UNSUPPORTED_COMPONENT.format(component_type),
                config_key="component_type"
            )

        self.component_type = component_type
        self.metric_type = metric_type or component_type
        self.api_url = api_url.rstrip('/')
        self.allocation = allocation
        self.timeout = timeout

        self.name: Optional[str] = None
        self.config: Optional[RemoteModelConfig] = None
        self._credentials: Optional[Dict[str, Any]] = None

    @property
    def verbose(self) -> bool:
        return self.config.verbose if self.config else False

    @property
    def shared_params(self) -> Optional[Dict[str, Any]]:
        return dict(self.config.params) if self.config else None

    @property
    def location(self) -> Optional[str]:
        return self.config.location if self.config else None

    def model_identifier(self) -> str:
        return f"org.boavizta.{self.component_type}.sci"

    def authenticate(self, credentials: Dict[str, Any]) -> None:
        self._credentials = credentials

    def configure(self, name: str, static_params: Optional[Dict[str, Any]] = None) -> "BoaviztaProvider":
        self.name = name
        self.capture_static_params(static_params or {})
        bt.logging.info(
            f"Configured {self.model_identifier()} model '{name}' "
            f"(verbose={self.verbose}, allocation={self.allocation})"
        )
        return self

    def capture_static_params(self, static_params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and store the component description.

        Requires `name` and the component count field (`core_units` for cpu,
        `units` otherwise). The `verbose` flag is consumed and not sent as
        part of the component description.
        """
        count_field = COMPONENT_COUNT_FIELDS[self.component_type]
        self.config = RemoteModelConfig.from_static_params(static_params, count_field)
        return self.shared_params

    def calculate(self, observations: Sequence[Dict[str, Any]]) -> List[ImpactResult]:
        return calculate_impacts(self, observations)

    def fetch_data(self, usage: UsageInput) -> ImpactResult:
        """Estimate the impact of one usage block through the component endpoint."""
        if self.config is None:
            log_and_raise_config_error(ErrorMessages.NOT_CONFIGURED)

        payload = {**self.config.params, "usage": usage.to_dict()}
        url = f"{self.api_url}{BOAVIZTA_COMPONENT_ENDPOINT}/{self.component_type}"
        params = {
            "verbose": str(self.verbose).lower(),
            "allocation": self.allocation,
        }

        body = self._post(url, params, payload)
        return format_response(body)

    def supported_locations(self) -> List[str]:
        """List the location codes accepted as `location`."""
        url = f"{self.api_url}{BOAVIZTA_COUNTRY_CODE_ENDPOINT}"
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            countries = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            log_and_raise_api_error(e, url, context="Supported locations request")

        locations = list(countries.values())
        bt.logging.debug(f"Boavizta supports {len(locations)} locations")
        return locations

    def _post(self, url: str, params: Dict[str, str], payload: Dict[str, Any]) -> Any:
        """Single POST, no retries; transport and HTTP failures are raised."""
        try:
            response = requests.post(url, params=params, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            log_and_raise_api_error(e, url, params=params, context=f"{self.model_identifier()} estimation")
