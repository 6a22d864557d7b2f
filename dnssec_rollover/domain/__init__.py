"""
Domain layer - Pure rollover logic.

This layer contains:
- Domain models (zones, signing keys, rollover markers, run summary)
- Domain services (the pure phase decision function)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, config,
or bootstrap. Only stdlib and typing imports are allowed.
"""

from dnssec_rollover.domain.errors import (
    ConfigurationError,
    KeyManagementError,
    MarkerParseError,
    StorageError,
)
from dnssec_rollover.domain.exceptions import RolloverError

__all__: list[str] = [
    "RolloverError",
    "ConfigurationError",
    "KeyManagementError",
    "MarkerParseError",
    "StorageError",
]
