"""Metadata store stub - markers held in a dict."""

from __future__ import annotations

from dnssec_rollover.application.ports.metadata_store import MetadataStoreProtocol
from dnssec_rollover.domain.errors import StorageError


class MetadataStoreStub(MetadataStoreProtocol):
    """In-memory MetadataStoreProtocol.

    Attributes:
        values: Stored markers keyed by (zone_id, kind).
        write_count: Number of set/delete calls, for asserting dry runs.
        fail_get_kinds: Kinds whose reads raise StorageError.
        fail_delete_kinds: Kinds whose deletes raise StorageError.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self.values: dict[tuple[int, str], str] = {}
        self.write_count = 0
        self.fail_get_kinds: set[str] = set()
        self.fail_delete_kinds: set[str] = set()

    def clear(self) -> None:
        """Clear all stored data."""
        self.values.clear()
        self.write_count = 0

    def snapshot(self) -> dict[tuple[int, str], str]:
        """Return a copy of the stored markers."""
        return dict(self.values)

    def kinds_for(self, zone_id: int) -> set[str]:
        """Marker kinds stored for one zone."""
        return {kind for (zid, kind) in self.values if zid == zone_id}

    async def get(self, zone_id: int, kind: str) -> str | None:
        if kind in self.fail_get_kinds:
            raise StorageError(f"read of {kind} failed")
        return self.values.get((zone_id, kind))

    async def set(self, zone_id: int, kind: str, value: str) -> None:
        self.write_count += 1
        self.values[(zone_id, kind)] = value

    async def delete(self, zone_id: int, kind: str) -> None:
        if kind in self.fail_delete_kinds:
            raise StorageError(f"delete of {kind} failed")
        self.write_count += 1
        self.values.pop((zone_id, kind), None)
