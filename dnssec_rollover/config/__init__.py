"""Configuration module for the rollover job.

Everything is read from environment variables once, at startup, and
handed to the components as immutable values.

Available Configurations:
- PolicyParameters via policy_from_environment(): rollover timing and key defaults
- PdnsApiConfig: PowerDNS HTTP API connection
- load_dotenv_file(): optional .env loading
"""

from dnssec_rollover.config.env import load_dotenv_file
from dnssec_rollover.config.pdns_api_config import PdnsApiConfig
from dnssec_rollover.config.rollover_policy import (
    DEFAULT_POLICY,
    policy_from_environment,
)

__all__ = [
    "DEFAULT_POLICY",
    "PdnsApiConfig",
    "load_dotenv_file",
    "policy_from_environment",
]
