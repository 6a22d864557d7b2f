"""Domain errors for the rollover job.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from RolloverError.
"""

from dnssec_rollover.domain.errors.rollover import (
    ConfigurationError,
    KeyManagementError,
    MarkerParseError,
    StorageError,
)

__all__: list[str] = [
    "ConfigurationError",
    "KeyManagementError",
    "MarkerParseError",
    "StorageError",
]
