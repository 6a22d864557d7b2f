"""Zone domain model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, eq=True)
class Zone:
    """A DNS zone served by PowerDNS.

    Owned by the PowerDNS backend; the rollover job only reads it.

    Attributes:
        id: Backend row id (``domains.id``).
        name: Zone name as stored, usually without the trailing dot.
    """

    id: int
    name: str

    @property
    def display_name(self) -> str:
        """Zone name without a trailing dot, for logs and audit detail."""
        return self.name.rstrip(".")
