"""Key management stub for testing.

Records every call and applies it to a KeyInventoryStub, standing in for
a PowerDNS server that creates keys with increasing ids. Failures can be
injected per operation and zone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dnssec_rollover.application.ports.key_management import (
    CreatedKey,
    CreateKeyRequest,
    KeyManagementProtocol,
)
from dnssec_rollover.domain.errors import KeyManagementError
from dnssec_rollover.domain.models.signing_key import ALGORITHM_NAMES, KSK_FLAGS, ZSK_FLAGS
from dnssec_rollover.infrastructure.stubs.key_inventory_stub import KeyInventoryStub

_ALGORITHM_NUMBERS = {name: number for number, name in ALGORITHM_NAMES.items()}
# Flags outside 256/257 parse back as csk
CSK_FLAGS = 258
_KEYTYPE_FLAGS = {"ksk": KSK_FLAGS, "zsk": ZSK_FLAGS, "csk": CSK_FLAGS}


@dataclass
class KeyManagementCall:
    """One recorded call."""

    operation: str
    zone_name: str
    args: dict[str, Any] = field(default_factory=dict)


class KeyManagementStub(KeyManagementProtocol):
    """In-memory KeyManagementProtocol.

    Attributes:
        calls: Every call received, successful or not.
        fail_create: Zone names whose create_key raises.
        fail_deactivate: Key ids whose deactivation raises.
        fail_delete: Key ids whose delete raises.
    """

    def __init__(self, inventory: KeyInventoryStub) -> None:
        """Initialize the stub.

        Args:
            inventory: Inventory to apply key changes to.
        """
        self._inventory = inventory
        self.calls: list[KeyManagementCall] = []
        self.fail_create: set[str] = set()
        self.fail_deactivate: set[int] = set()
        self.fail_delete: set[int] = set()

    def operations(self) -> list[str]:
        """Operation names of the recorded calls, in order."""
        return [call.operation for call in self.calls]

    def _zone_id(self, zone_name: str) -> int:
        for zone in self._inventory.zones.values():
            if zone.display_name == zone_name.rstrip("."):
                return zone.id
        raise KeyManagementError(
            f"PowerDNS API error 404 - Could not find domain '{zone_name}'",
            status_code=404,
        )

    async def create_key(self, zone_name: str, request: CreateKeyRequest) -> CreatedKey:
        self.calls.append(
            KeyManagementCall("create_key", zone_name, {"request": request})
        )
        if zone_name in self.fail_create:
            raise KeyManagementError(
                "PowerDNS API error 500 - Creating key failed",
                status_code=500,
            )
        zone_id = self._zone_id(zone_name)
        flags = _KEYTYPE_FLAGS[request.keytype]
        key = self._inventory.add_key(
            zone_id=zone_id,
            flags=flags,
            algorithm_number=_ALGORITHM_NUMBERS.get(request.algorithm, 13),
        )
        return CreatedKey(
            id=key.id,
            keytype=request.keytype,
            active=True,
            algorithm=request.algorithm,
        )

    async def set_key_active(self, zone_name: str, key_id: int, active: bool) -> None:
        self.calls.append(
            KeyManagementCall(
                "set_key_active", zone_name, {"key_id": key_id, "active": active}
            )
        )
        if not active and key_id in self.fail_deactivate:
            raise KeyManagementError(
                "PowerDNS API error 422 - Key could not be deactivated",
                status_code=422,
            )
        self._inventory.set_active(key_id, active)

    async def delete_key(self, zone_name: str, key_id: int) -> None:
        self.calls.append(KeyManagementCall("delete_key", zone_name, {"key_id": key_id}))
        if key_id in self.fail_delete:
            raise KeyManagementError(
                "PowerDNS API error 500 - Key could not be deleted",
                status_code=500,
            )
        self._inventory.remove_key(key_id)
