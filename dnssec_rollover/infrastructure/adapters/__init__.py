"""Infrastructure adapters implementing the application ports.

- SystemTimeAuthority: wall clock in UTC
- PdnsApiClient: PowerDNS HTTP API key management
- persistence: SQL inventory, metadata store and audit sink
"""

from dnssec_rollover.infrastructure.adapters.pdns_api_client import (
    CryptokeyDescriptor,
    PdnsApiClient,
)
from dnssec_rollover.infrastructure.adapters.time_authority import SystemTimeAuthority

__all__: list[str] = [
    "CryptokeyDescriptor",
    "PdnsApiClient",
    "SystemTimeAuthority",
]
