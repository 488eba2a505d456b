import os
from dotenv import load_dotenv
from pathlib import Path
import bittensor as bt

env_path = Path(__file__).parents[1] / '.env'
load_dotenv(dotenv_path=env_path)

__version__ = "0.3.0"

# Boavizta estimation service
BOAVIZTA_API_URL = os.getenv('BOAVIZTA_API_URL', 'https://api.boavizta.org').rstrip('/')
BOAVIZTA_COUNTRY_CODE_ENDPOINT = "/v1/utils/country_code"
BOAVIZTA_COMPONENT_ENDPOINT = "/v1/component"
DEFAULT_ALLOCATION = os.getenv('DEFAULT_ALLOCATION', 'LINEAR')
REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '30'))

# Component type -> static param holding the component count
COMPONENT_COUNT_FIELDS = {
    "cpu": "core_units",
    "ram": "units",
    "gpu": "units",
}

# Unit conversions
KG_TO_G = 1000.0
MJ_PER_KWH = 3.6
SECONDS_PER_HOUR = 3600.0
PERCENT = 100.0

# External process plugins
# Unset or empty means the spawned process is not time-bound
_shell_timeout = os.getenv('SHELL_PLUGIN_TIMEOUT', '')
SHELL_PLUGIN_TIMEOUT = float(_shell_timeout) if _shell_timeout else None
YAML_INDENT = 2

# Aggregation
DEFAULT_AGGREGATION_METHOD = "sum"
AGGREGATION_METHODS = ("sum", "avg", "none")

# Log out all non-sensitive config variables
bt.logging.info(f"BOAVIZTA_API_URL: {BOAVIZTA_API_URL}")
bt.logging.info(f"DEFAULT_ALLOCATION: {DEFAULT_ALLOCATION}")
bt.logging.info(f"REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
bt.logging.info(f"SHELL_PLUGIN_TIMEOUT: {SHELL_PLUGIN_TIMEOUT}")
