"""In-memory port implementations.

Used by the unit tests and by local dry runs without a backend. The
key management stub mutates a KeyInventoryStub so a whole rollover
cycle can be replayed across several simulated runs.
"""

from dnssec_rollover.infrastructure.stubs.audit_sink_stub import AuditSinkStub
from dnssec_rollover.infrastructure.stubs.key_inventory_stub import KeyInventoryStub
from dnssec_rollover.infrastructure.stubs.key_management_stub import KeyManagementStub
from dnssec_rollover.infrastructure.stubs.metadata_store_stub import MetadataStoreStub

__all__: list[str] = [
    "AuditSinkStub",
    "KeyInventoryStub",
    "KeyManagementStub",
    "MetadataStoreStub",
]
