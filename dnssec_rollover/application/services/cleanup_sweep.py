"""Cleanup sweep - deletes deactivated keys once their grace period is over.

Runs for every candidate zone after its phase action, whatever that action
did. Only keys this job deactivated itself (they carry a
PDNSCONSOLE-OLDKEY-<id>-DEACTIVATED marker) are considered; inactive keys
without a marker were switched off by someone else and are never touched.

A key is deleted iff it is inactive, has a marker, and the marker is at
least ``deletion_grace_days`` old. The marker is removed only after the
delete call succeeded; a failed delete keeps it so the next run retries.
Failures are recorded per key and never stop the rest of the sweep.
"""

from __future__ import annotations

from datetime import datetime

from structlog import BoundLogger, get_logger

from dnssec_rollover.application.ports.audit_sink import AuditSinkProtocol
from dnssec_rollover.application.ports.key_inventory import KeyInventoryProtocol
from dnssec_rollover.application.ports.key_management import KeyManagementProtocol
from dnssec_rollover.application.ports.time_authority import TimeAuthorityProtocol
from dnssec_rollover.application.services.rollover_metadata_service import (
    RolloverMetadataService,
)
from dnssec_rollover.domain.errors import (
    KeyManagementError,
    MarkerParseError,
    StorageError,
)
from dnssec_rollover.domain.models.audit_entry import (
    CRYPTOKEYS_TABLE,
    KEY_DELETE_EVENT,
    AuditEntry,
)
from dnssec_rollover.domain.models.rollover_outcome import (
    CleanupOutcome,
    KeyAction,
    KeyActionResult,
)
from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.domain.models.signing_key import SigningKey
from dnssec_rollover.domain.models.zone import Zone
from dnssec_rollover.domain.services.phase_decider import whole_days_between

logger = get_logger()


class CleanupSweep:
    """Per-zone deletion of keys past their deactivation grace period."""

    def __init__(
        self,
        policy: PolicyParameters,
        key_inventory: KeyInventoryProtocol,
        key_management: KeyManagementProtocol,
        metadata: RolloverMetadataService,
        audit_sink: AuditSinkProtocol,
        time_authority: TimeAuthorityProtocol,
        dry_run: bool = False,
    ) -> None:
        self._policy = policy
        self._inventory = key_inventory
        self._keys = key_management
        self._metadata = metadata
        self._audit = audit_sink
        self._time = time_authority
        self._dry_run = dry_run

    async def sweep(self, zone: Zone) -> CleanupOutcome:
        """Delete a zone's expired deactivated keys.

        The key list and markers are re-read here rather than taken from
        the phase action, which may just have changed them. Each key is
        handled on its own: a failure on one key is recorded and the
        remaining keys are still swept.

        Args:
            zone: Zone to sweep.

        Returns:
            CleanupOutcome with one result per attempted deletion.

        Raises:
            StorageError: If the zone's key list cannot be read.
        """
        log = logger.bind(zone=zone.display_name, zone_id=zone.id)
        now = self._time.now()
        results: list[KeyActionResult] = []

        for key in await self._inventory.list_keys(zone.id):
            if key.active:
                continue
            result = await self._sweep_key(zone, key, now, log)
            if result is not None:
                results.append(result)

        return CleanupOutcome(zone_id=zone.id, results=tuple(results))

    async def _sweep_key(
        self,
        zone: Zone,
        key: SigningKey,
        now: datetime,
        log: BoundLogger,
    ) -> KeyActionResult | None:
        grace = self._policy.deletion_grace_days
        try:
            deactivated_at = await self._metadata.get_deactivated_at(zone.id, key.id)
        except MarkerParseError as e:
            log.warning("deactivation_marker_invalid", key_id=key.id, error=str(e))
            return None
        except StorageError as e:
            log.warning("deactivation_marker_unreadable", key_id=key.id, error=str(e))
            return KeyActionResult.failed(key.id, KeyAction.DELETE, str(e))
        if deactivated_at is None:
            return None

        age_days = whole_days_between(deactivated_at, now)
        if age_days < grace:
            log.debug(
                "deactivated_key_in_grace",
                key_id=key.id,
                age_days=age_days,
                grace_days=grace,
            )
            return None

        if self._dry_run:
            log.info("dry_run_would_delete_key", key_id=key.id, age_days=age_days)
            return KeyActionResult.ok(key.id, KeyAction.DELETE, age_days)

        try:
            await self._keys.delete_key(zone.name, key.id)
        except KeyManagementError as e:
            log.warning(
                "key_delete_failed",
                key_id=key.id,
                age_days=age_days,
                error=str(e),
            )
            return KeyActionResult.failed(key.id, KeyAction.DELETE, str(e), age_days)

        # The key is gone; a marker left behind is never read again.
        try:
            await self._metadata.clear_deactivation(zone.id, key.id)
        except StorageError as e:
            log.warning("deactivation_marker_clear_failed", key_id=key.id, error=str(e))

        await self._audit.append(
            AuditEntry(
                event_type=KEY_DELETE_EVENT,
                target_table=CRYPTOKEYS_TABLE,
                target_id=key.id,
                detail={"domain": zone.display_name, "age_days": age_days},
                occurred_at=now,
            )
        )
        log.info("deactivated_key_deleted", key_id=key.id, age_days=age_days)
        return KeyActionResult.ok(key.id, KeyAction.DELETE, age_days)
