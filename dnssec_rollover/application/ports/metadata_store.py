"""Metadata store port.

Generic per-zone key/value storage for rollover markers. The store knows
nothing about marker semantics; RolloverMetadataService maps kinds onto the
typed RolloverMetadata record.
"""

from __future__ import annotations

from typing import Protocol


class MetadataStoreProtocol(Protocol):
    """Protocol for per-zone marker storage."""

    async def get(self, zone_id: int, kind: str) -> str | None:
        """Read one marker.

        Args:
            zone_id: Zone the marker belongs to.
            kind: Marker kind.

        Returns:
            The stored value, or None if absent.
        """
        ...

    async def set(self, zone_id: int, kind: str, value: str) -> None:
        """Create or replace one marker.

        Args:
            zone_id: Zone the marker belongs to.
            kind: Marker kind.
            value: Value to store.
        """
        ...

    async def delete(self, zone_id: int, kind: str) -> None:
        """Remove one marker. Removing an absent marker is a no-op.

        Args:
            zone_id: Zone the marker belongs to.
            kind: Marker kind.
        """
        ...
