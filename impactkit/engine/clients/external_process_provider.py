"""
Impact model backed by an external executable.

Implements the ImpactModel interface by delegating each usage block to a
ShellPlugin process instead of a remote service.
"""
from typing import Any, Dict, List, Optional, Sequence
import bittensor as bt

from impactkit.engine.clients.shell_plugin import ShellPlugin
from impactkit.engine.interfaces.impact_model import ImpactModel
from impactkit.engine.models.impact_result import ImpactResult
from impactkit.engine.models.observation import UsageInput
from impactkit.engine.services.impact_calculation_service import calculate_impacts
from impactkit.engine.utils.error_handling import (
    ErrorMessages,
    log_and_raise_config_error,
    log_and_raise_process_error
)

# Static params consumed by the plugin itself rather than sent to the process
PLUGIN_KEYS = ("command", "timeout", "mapping", "parameter-metadata")


class ExternalProcessProvider(ImpactModel):
    """
    Runs one plugin process per observation and reads `e` / `m` back.

    The process receives a single record `{...static params, model, usage}`
    and must answer with at least one output record holding numeric `e`
    (kWh) and `m` (gCO2eq), after output mapping is applied.
    """

    def __init__(self, metric_type: str = "cpu"):
        self.metric_type = metric_type
        self.name: Optional[str] = None
        self.shared_params: Optional[Dict[str, Any]] = None
        self.plugin: Optional[ShellPlugin] = None
        self._credentials: Optional[Dict[str, Any]] = None

    @property
    def location(self) -> Optional[str]:
        return self.shared_params.get("location") if self.shared_params else None

    def model_identifier(self) -> str:
        return f"external.{self.name or 'unconfigured'}.{self.metric_type}"

    def authenticate(self, credentials: Dict[str, Any]) -> None:
        self._credentials = credentials

    def configure(self, name: str, static_params: Optional[Dict[str, Any]] = None) -> "ExternalProcessProvider":
        self.name = name
        self.shared_params = self.capture_static_params(static_params or {})
        bt.logging.info(f"Configured external process model '{name}' ({self.plugin.config.command})")
        return self

    def capture_static_params(self, static_params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Build the plugin from `command`, `timeout`, `mapping` and
        `parameter-metadata`; every other field becomes a shared param.
        """
        if "command" not in static_params:
            log_and_raise_config_error(
                ErrorMessages.MISSING_PARAMETER.format("command"),
                config_key="command"
            )

        global_config = {"command": static_params["command"]}
        if "timeout" in static_params:
            global_config["timeout"] = static_params["timeout"]

        self.plugin = ShellPlugin(
            global_config,
            mapping=static_params.get("mapping"),
            parameter_metadata=static_params.get("parameter-metadata"),
        )
        return {k: v for k, v in static_params.items() if k not in PLUGIN_KEYS}

    def calculate(self, observations: Sequence[Dict[str, Any]]) -> List[ImpactResult]:
        return calculate_impacts(self, observations)

    def fetch_data(self, usage: UsageInput) -> ImpactResult:
        """Run the plugin on one usage block and read the first output record."""
        if self.plugin is None or self.shared_params is None:
            log_and_raise_config_error(ErrorMessages.NOT_CONFIGURED)

        record = {**self.shared_params, "model": self.name, "usage": usage.to_dict()}
        outputs = self.plugin.execute([record])

        if not outputs:
            log_and_raise_process_error(
                ErrorMessages.PROCESS_NO_RESULT.format("empty outputs"), self.plugin.config.argv
            )
        output = outputs[0]
        try:
            return ImpactResult(e=float(output["e"]), m=float(output["m"]))
        except (KeyError, TypeError, ValueError) as e:
            log_and_raise_process_error(
                ErrorMessages.PROCESS_NO_RESULT.format(f"{output!r} ({e})"), self.plugin.config.argv
            )
