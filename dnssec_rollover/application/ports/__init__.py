"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports keep the rollover services testable against in-memory stubs.

Available ports:
- KeyInventoryProtocol: Read access to zones and their signing keys
- MetadataStoreProtocol: Per-zone marker storage (get/set/delete by kind)
- KeyManagementProtocol: Create/activate/deactivate/delete keys on the DNS server
- AuditSinkProtocol: Append-only audit log
- TimeAuthorityProtocol: Single source of "now"
"""

from dnssec_rollover.application.ports.audit_sink import AuditSinkProtocol
from dnssec_rollover.application.ports.key_inventory import KeyInventoryProtocol
from dnssec_rollover.application.ports.key_management import (
    CreatedKey,
    CreateKeyRequest,
    KeyManagementProtocol,
)
from dnssec_rollover.application.ports.metadata_store import MetadataStoreProtocol
from dnssec_rollover.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AuditSinkProtocol",
    "CreateKeyRequest",
    "CreatedKey",
    "KeyInventoryProtocol",
    "KeyManagementProtocol",
    "MetadataStoreProtocol",
    "TimeAuthorityProtocol",
]
