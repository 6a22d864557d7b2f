"""Rollover metadata service.

Maps the typed RolloverMetadata record onto the generic metadata store.
This is the only service that reads or writes marker kinds; the engine
and the cleanup sweep talk to it instead of the store.

Usage:
    service = RolloverMetadataService(store)
    metadata = await service.load(zone.id)
    await service.record_rollover_start(zone.id, now)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from dnssec_rollover.application.ports.metadata_store import MetadataStoreProtocol
from dnssec_rollover.domain.models.rollover_metadata import (
    HOLD_KIND,
    ROLLDATE_KIND,
    ROLLSTART_KIND,
    RolloverMetadata,
    deactivation_kind,
    format_date,
    format_timestamp,
    parse_date,
    parse_hold_days,
    parse_timestamp,
)


class RolloverMetadataService:
    """Typed access to one zone's rollover markers.

    Attributes:
        _store: Generic marker storage.
    """

    def __init__(self, store: MetadataStoreProtocol) -> None:
        """Initialize the service.

        Args:
            store: Metadata store holding the markers.
        """
        self._store = store

    async def load(self, zone_id: int) -> RolloverMetadata:
        """Read the markers a zone's phase decision depends on.

        Markers are decoded in decision order and reading stops at the
        first absent one. A stray hold override or start marker on a zone
        that has no baseline yet never stops it from being baselined.

        Args:
            zone_id: Zone to read.

        Returns:
            The zone's RolloverMetadata.

        Raises:
            MarkerParseError: If a marker the decision needs cannot be parsed.
        """
        raw_date = await self._store.get(zone_id, ROLLDATE_KIND)
        if not raw_date:
            return RolloverMetadata(zone_id=zone_id)
        baseline = parse_date(zone_id, ROLLDATE_KIND, raw_date)

        raw_start = await self._store.get(zone_id, ROLLSTART_KIND)
        if not raw_start:
            return RolloverMetadata(zone_id=zone_id, baseline_date=baseline)
        started_at = parse_timestamp(zone_id, ROLLSTART_KIND, raw_start)

        raw_hold = await self._store.get(zone_id, HOLD_KIND)
        return RolloverMetadata(
            zone_id=zone_id,
            baseline_date=baseline,
            rollover_started_at=started_at,
            hold_override_days=parse_hold_days(zone_id, raw_hold) if raw_hold else None,
        )

    async def get_deactivated_at(self, zone_id: int, key_id: int) -> datetime | None:
        """Read one key's deactivation marker.

        Raises:
            MarkerParseError: If the marker cannot be parsed.
        """
        kind = deactivation_kind(key_id)
        raw = await self._store.get(zone_id, kind)
        if not raw:
            return None
        return parse_timestamp(zone_id, kind, raw)

    async def marked_key_ids(self, zone_id: int, key_ids: Iterable[int]) -> set[int]:
        """Keys among ``key_ids`` that carry a deactivation marker.

        Only presence is checked; an unparseable marker still counts.
        """
        marked: set[int] = set()
        for key_id in key_ids:
            if await self._store.get(zone_id, deactivation_kind(key_id)):
                marked.add(key_id)
        return marked

    async def record_baseline(self, zone_id: int, today: date) -> None:
        """Write the first-sighting baseline date."""
        await self._store.set(zone_id, ROLLDATE_KIND, format_date(today))

    async def record_rollover_start(self, zone_id: int, started_at: datetime) -> None:
        """Mark a rollover as in progress."""
        await self._store.set(zone_id, ROLLSTART_KIND, format_timestamp(started_at))

    async def record_completion(
        self,
        zone_id: int,
        today: date,
        deactivated_key_ids: Iterable[int],
        deactivated_at: datetime,
    ) -> None:
        """Persist a completed rollover.

        Deactivation markers are written first so a failure part-way
        never leaves a deactivated key without its marker.

        Args:
            zone_id: Zone that completed its rollover.
            today: New baseline date.
            deactivated_key_ids: Keys deactivated by the completion.
            deactivated_at: When they were deactivated.
        """
        stamp = format_timestamp(deactivated_at)
        for key_id in deactivated_key_ids:
            await self._store.set(zone_id, deactivation_kind(key_id), stamp)
        await self._store.set(zone_id, ROLLDATE_KIND, format_date(today))
        await self._store.delete(zone_id, ROLLSTART_KIND)

    async def clear_deactivation(self, zone_id: int, key_id: int) -> None:
        """Remove a deleted key's deactivation marker."""
        await self._store.delete(zone_id, deactivation_kind(key_id))
