"""Typed static configuration for impact models and plugins."""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from impactkit.engine.utils.config import SHELL_PLUGIN_TIMEOUT
from impactkit.engine.utils.error_handling import (
    ErrorMessages,
    log_and_raise_config_error
)


@dataclass(frozen=True)
class RemoteModelConfig:
    """
    Validated static parameters for a remote estimation model.

    `params` is the stored copy sent to the provider with every request;
    the verbose flag is consumed and never part of it.
    """
    params: Dict[str, Any]
    verbose: bool = False

    @property
    def location(self) -> Optional[str]:
        return self.params.get("location")

    @classmethod
    def from_static_params(cls, static_params: Mapping[str, Any], count_field: str) -> 'RemoteModelConfig':
        """
        Raises:
            ConfigurationError: If `name` or the component count field is missing
        """
        params = dict(static_params)
        verbose = params.pop("verbose", False)
        if isinstance(verbose, str):
            verbose = verbose.lower() == "true"
        verbose = bool(verbose)

        for required in ("name", count_field):
            if required not in params:
                log_and_raise_config_error(
                    ErrorMessages.MISSING_PARAMETER.format(required),
                    config_key=required
                )

        return cls(params=params, verbose=verbose)


@dataclass(frozen=True)
class ShellPluginConfig:
    """Validated global config of an external process plugin."""
    command: str
    timeout: Optional[float] = SHELL_PLUGIN_TIMEOUT

    @property
    def argv(self) -> List[str]:
        """Command split on spaces; quoting is not supported."""
        return [part for part in self.command.split(" ") if part]

    @classmethod
    def from_dict(cls, global_config: Optional[Mapping[str, Any]]) -> 'ShellPluginConfig':
        """
        Raises:
            ConfigurationError: If `command` is missing or not a non-empty string,
                or `timeout` is not a positive number
        """
        config = dict(global_config or {})
        command = config.pop("command", None)
        if not isinstance(command, str) or not command.strip():
            log_and_raise_config_error(
                ErrorMessages.MISSING_PARAMETER.format("command"),
                config_key="command",
                config_value=command
            )

        timeout = config.pop("timeout", SHELL_PLUGIN_TIMEOUT)
        if timeout is not None:
            try:
                timeout = float(timeout)
            except (TypeError, ValueError):
                log_and_raise_config_error(
                    f"Timeout must be a number of seconds, got {timeout!r}",
                    config_key="timeout"
                )
            if timeout <= 0:
                log_and_raise_config_error(
                    f"Timeout must be positive, got {timeout}",
                    config_key="timeout"
                )

        return cls(command=command, timeout=timeout)
