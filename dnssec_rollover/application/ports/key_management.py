"""Key management port.

Requests key transitions from the authoritative DNS server. Key material is
generated and held by the server; the job only names the key role and
algorithm it wants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class CreateKeyRequest:
    """Parameters for a new signing key.

    Attributes:
        keytype: ``ksk``, ``zsk`` or ``csk``.
        algorithm: Algorithm mnemonic, e.g. ``ECDSAP256SHA256``.
        bits: Key size; only sent for RSA algorithms.
    """

    keytype: str
    algorithm: str
    bits: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to API payload dict, omitting an unset key size."""
        payload: dict[str, Any] = {
            "keytype": self.keytype,
            "algorithm": self.algorithm,
        }
        if self.bits is not None:
            payload["bits"] = self.bits
        return payload


@dataclass(frozen=True)
class CreatedKey:
    """Descriptor of a key the server created.

    Attributes:
        id: Server-assigned key id.
        keytype: Key role reported by the server.
        active: Whether the key is active.
        algorithm: Algorithm reported by the server, if any.
    """

    id: int
    keytype: str
    active: bool
    algorithm: str | None = None


class KeyManagementProtocol(Protocol):
    """Protocol for key transitions on the DNS server.

    Every method raises KeyManagementError when the call fails.
    """

    async def create_key(self, zone_name: str, request: CreateKeyRequest) -> CreatedKey:
        """Create a new signing key for a zone.

        Args:
            zone_name: Zone to add the key to.
            request: Key parameters.

        Returns:
            Descriptor of the created key.
        """
        ...

    async def set_key_active(self, zone_name: str, key_id: int, active: bool) -> None:
        """Activate or deactivate a key.

        Args:
            zone_name: Zone owning the key.
            key_id: Key to change.
            active: Desired state.
        """
        ...

    async def delete_key(self, zone_name: str, key_id: int) -> None:
        """Permanently delete a key.

        Args:
            zone_name: Zone owning the key.
            key_id: Key to delete.
        """
        ...
