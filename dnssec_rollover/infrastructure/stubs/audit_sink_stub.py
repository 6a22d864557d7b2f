"""Audit sink stub - collects entries in a list."""

from __future__ import annotations

from dnssec_rollover.application.ports.audit_sink import AuditSinkProtocol
from dnssec_rollover.domain.models.audit_entry import AuditEntry


class AuditSinkStub(AuditSinkProtocol):
    """In-memory AuditSinkProtocol.

    Attributes:
        entries: Appended entries in order.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self.entries: list[AuditEntry] = []

    def events(self) -> list[str]:
        """Event types of the appended entries, in order."""
        return [entry.event_type for entry in self.entries]

    async def append(self, entry: AuditEntry) -> None:
        self.entries.append(entry)
