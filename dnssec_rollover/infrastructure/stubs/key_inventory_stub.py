"""Key inventory stub - zones and keys held in memory."""

from __future__ import annotations

from dataclasses import replace

from dnssec_rollover.application.ports.key_inventory import KeyInventoryProtocol
from dnssec_rollover.domain.errors import StorageError
from dnssec_rollover.domain.models.signing_key import SigningKey
from dnssec_rollover.domain.models.zone import Zone


class KeyInventoryStub(KeyInventoryProtocol):
    """In-memory KeyInventoryProtocol.

    Attributes:
        zones: Known zones by id.
        keys: Known keys by id.
        fail_zone_ids: Zones whose key listing raises StorageError.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self.zones: dict[int, Zone] = {}
        self.keys: dict[int, SigningKey] = {}
        self.fail_zone_ids: set[int] = set()
        self._next_key_id = 1

    def add_zone(self, zone: Zone) -> Zone:
        """Add a zone directly to storage for testing."""
        self.zones[zone.id] = zone
        return zone

    def add_key(
        self,
        zone_id: int,
        flags: int,
        algorithm_number: int,
        active: bool = True,
        key_id: int | None = None,
    ) -> SigningKey:
        """Add a key with synthetic DNSKEY content.

        Args:
            zone_id: Owning zone.
            flags: DNSKEY flags (257, 256, ...).
            algorithm_number: IANA algorithm number.
            active: Initial state.
            key_id: Explicit id; the next free id if omitted.

        Returns:
            The stored key.
        """
        if key_id is None:
            key_id = self._next_key_id
        self._next_key_id = max(self._next_key_id, key_id + 1)
        key = SigningKey(
            id=key_id,
            zone_id=zone_id,
            active=active,
            flags=flags,
            content=f"{flags} 3 {algorithm_number} AwEAAbase64keymaterial",
        )
        self.keys[key.id] = key
        return key

    def set_active(self, key_id: int, active: bool) -> None:
        """Change a stored key's state."""
        self.keys[key_id] = replace(self.keys[key_id], active=active)

    def remove_key(self, key_id: int) -> None:
        """Drop a stored key."""
        del self.keys[key_id]

    async def list_zones_with_active_keys(self) -> list[Zone]:
        """List zones with at least one active key, by id."""
        zone_ids = {key.zone_id for key in self.keys.values() if key.active}
        return [self.zones[zone_id] for zone_id in sorted(zone_ids) if zone_id in self.zones]

    async def list_keys(self, zone_id: int) -> list[SigningKey]:
        """List a zone's keys by id.

        Raises:
            StorageError: If the zone was registered in ``fail_zone_ids``.
        """
        if zone_id in self.fail_zone_ids:
            raise StorageError(f"Simulated inventory failure for zone {zone_id}")
        return sorted(
            (key for key in self.keys.values() if key.zone_id == zone_id),
            key=lambda k: k.id,
        )
