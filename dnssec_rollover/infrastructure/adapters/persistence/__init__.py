"""SQL persistence adapters over the PowerDNS backend database.

All adapters take an SQLAlchemy async session factory and use textual
SQL against the stock PowerDNS generic SQL schema (``domains``,
``cryptokeys``, ``domainmetadata``) plus the console's ``audit_log``.
"""

from dnssec_rollover.infrastructure.adapters.persistence.sql_audit_sink import (
    SqlAuditSink,
)
from dnssec_rollover.infrastructure.adapters.persistence.sql_key_inventory import (
    SqlKeyInventory,
)
from dnssec_rollover.infrastructure.adapters.persistence.sql_metadata_store import (
    SqlMetadataStore,
)

__all__: list[str] = [
    "SqlAuditSink",
    "SqlKeyInventory",
    "SqlMetadataStore",
]
