"""
External process plugin adapter.

Lets any executable act as an impact model. The whole input batch is written
to the process's stdin as one YAML document; the process answers on stdout
with one or more YAML documents carrying an `outputs` list.
"""
import subprocess
from typing import Any, Dict, List, Mapping, Optional
import bittensor as bt
import yaml

from impactkit.engine.models.plugin_config import ShellPluginConfig
from impactkit.engine.utils.config import YAML_INDENT
from impactkit.engine.utils.error_handling import (
    ErrorMessages,
    log_and_raise_process_error
)


def map_output(output: Dict[str, Any], mapping: Optional[Mapping[str, str]]) -> Dict[str, Any]:
    """Rename output fields through mapping; unmapped fields pass through."""
    if not mapping:
        return output
    return {mapping.get(key, key): value for key, value in output.items()}


class ShellPlugin:
    """
    Runs an external executable as an `execute` plugin.

    Args:
        global_config: Plugin config; must hold `command`, may hold `timeout`
        mapping: Output field renames applied to every returned record
        parameter_metadata: Optional `inputs` / `outputs` parameter metadata
    """

    def __init__(self, global_config: Dict[str, Any],
                 mapping: Optional[Dict[str, str]] = None,
                 parameter_metadata: Optional[Dict[str, Any]] = None):
        self.global_config = dict(global_config or {})
        self.config = ShellPluginConfig.from_dict(self.global_config)
        self.mapping = dict(mapping or {})
        parameter_metadata = parameter_metadata or {}
        self.metadata = {
            "kind": "execute",
            "inputs": parameter_metadata.get("inputs"),
            "outputs": parameter_metadata.get("outputs"),
        }

    def execute(self, inputs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Run the configured executable over a batch of input records.

        Returns:
            Output records in the order the process emitted them, with field
            names remapped

        Raises:
            ProcessExecutionError: If the process cannot be spawned, times
                out, exits non-zero or its output cannot be parsed
        """
        input_with_config = {**(inputs[0] if inputs else {}), **self.global_config}
        shell_config = ShellPluginConfig(command=input_with_config["command"], timeout=self.config.timeout)

        try:
            document = yaml.safe_dump(list(inputs), indent=YAML_INDENT, sort_keys=False)
        except yaml.YAMLError as e:
            log_and_raise_process_error(ErrorMessages.PROCESS_INPUT.format(e), shell_config.argv)
        stdout = self._run_model_in_shell(document, shell_config)
        outputs = self._parse_outputs(stdout, shell_config.argv)

        bt.logging.debug(f"Plugin '{shell_config.command}' returned {len(outputs)} outputs for {len(inputs)} inputs")
        return [map_output(output, self.mapping) for output in outputs]

    def _run_model_in_shell(self, document: str, config: ShellPluginConfig) -> str:
        """Spawn the executable, feed it the document and wait for it to exit."""
        argv = config.argv
        try:
            # run() drains and closes both pipes, and kills the child on timeout
            result = subprocess.run(
                argv,
                input=document,
                capture_output=True,
                text=True,
                timeout=config.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            log_and_raise_process_error(
                ErrorMessages.PROCESS_TIMEOUT.format(config.timeout), argv,
                context={'stderr': e.stderr}
            )
        except (OSError, ValueError) as e:
            log_and_raise_process_error(e, argv)

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            log_and_raise_process_error(
                ErrorMessages.PROCESS_EXIT.format(result.returncode, stderr), argv,
                context={'returncode': result.returncode, 'stderr': stderr}
            )

        bt.logging.info(f"Plugin process {argv[0]!r} completed")
        return result.stdout

    def _parse_outputs(self, stdout: str, argv: List[str]) -> List[Dict[str, Any]]:
        """Collect the `outputs` records of every YAML document, one level flattened."""
        try:
            documents = list(yaml.safe_load_all(stdout))
        except yaml.YAMLError as e:
            log_and_raise_process_error(ErrorMessages.PROCESS_OUTPUT.format(e), argv)

        sequences = []
        for document in documents:
            if document is None:
                continue
            if isinstance(document, dict) and "outputs" in document:
                sequences.append(document["outputs"] or [])
            elif isinstance(document, list):
                sequences.append(document)
            else:
                log_and_raise_process_error(
                    ErrorMessages.PROCESS_OUTPUT.format(f"expected an 'outputs' field, got {document!r}"),
                    argv
                )

        outputs = []
        for sequence in sequences:
            if not isinstance(sequence, list):
                log_and_raise_process_error(
                    ErrorMessages.PROCESS_OUTPUT.format(f"'outputs' must be a list, got {sequence!r}"),
                    argv
                )
            for item in sequence:
                items = item if isinstance(item, list) else [item]
                for record in items:
                    if not isinstance(record, dict):
                        log_and_raise_process_error(
                            ErrorMessages.PROCESS_OUTPUT.format(f"output record must be a mapping, got {record!r}"),
                            argv
                        )
                    outputs.append(record)
        return outputs
