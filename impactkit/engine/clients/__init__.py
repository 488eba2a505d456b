"""
Impact model clients.

Contains the Boavizta remote estimation model, the external process plugin
adapter and the impact model built on top of it.
"""

from .boavizta_provider import BoaviztaProvider
from .shell_plugin import ShellPlugin, map_output
from .external_process_provider import ExternalProcessProvider

__all__ = ['BoaviztaProvider', 'ShellPlugin', 'map_output', 'ExternalProcessProvider']
