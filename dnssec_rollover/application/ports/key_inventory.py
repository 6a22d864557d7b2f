"""Key inventory port.

Read-only access to the zones of the PowerDNS backend and their signing
keys. The inventory never changes key state; all transitions go through
KeyManagementProtocol.
"""

from __future__ import annotations

from typing import Protocol

from dnssec_rollover.domain.models.signing_key import SigningKey
from dnssec_rollover.domain.models.zone import Zone


class KeyInventoryProtocol(Protocol):
    """Protocol for reading zones and signing keys."""

    async def list_zones_with_active_keys(self) -> list[Zone]:
        """List zones that currently have at least one active key.

        Returns:
            Zones ordered by id.

        Raises:
            StorageError: If the backend cannot be read.
        """
        ...

    async def list_keys(self, zone_id: int) -> list[SigningKey]:
        """List a zone's signing keys.

        Args:
            zone_id: Zone to read.

        Returns:
            Keys ordered ascending by id (empty if the zone has none).

        Raises:
            StorageError: If the backend cannot be read.
        """
        ...
