"""Audit sink port.

Durable, append-only record of the key actions the job performed.
"""

from __future__ import annotations

from typing import Protocol

from dnssec_rollover.domain.models.audit_entry import AuditEntry


class AuditSinkProtocol(Protocol):
    """Protocol for appending audit entries."""

    async def append(self, entry: AuditEntry) -> None:
        """Append one entry.

        Implementations must not raise for storage failures: the key action
        being audited has already happened and cannot be undone.

        Args:
            entry: The entry to append.
        """
        ...
