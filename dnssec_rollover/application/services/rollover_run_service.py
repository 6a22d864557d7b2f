"""Rollover run service - one invocation over all candidate zones.

For every zone with at least one active key, strictly one zone at a time:

1. read the zone's keys and markers
2. decide its phase (pure)
3. execute the phase action
4. run the cleanup sweep, whatever step 3 did

A failure in one zone is logged and counted; it never stops the run.

Usage:
    service = RolloverRunService(
        policy=policy,
        key_inventory=inventory,
        metadata=metadata_service,
        engine=engine,
        cleanup=cleanup,
        time_authority=time_authority,
    )
    summary = await service.run()
    print(summary.render())
"""

from __future__ import annotations

from structlog import get_logger

from dnssec_rollover.application.ports.key_inventory import KeyInventoryProtocol
from dnssec_rollover.application.ports.time_authority import TimeAuthorityProtocol
from dnssec_rollover.application.services.cleanup_sweep import CleanupSweep
from dnssec_rollover.application.services.rollover_engine import RolloverEngine
from dnssec_rollover.application.services.rollover_metadata_service import (
    RolloverMetadataService,
)
from dnssec_rollover.domain.errors import MarkerParseError
from dnssec_rollover.domain.exceptions import RolloverError
from dnssec_rollover.domain.models.rollover_outcome import ZoneAction, ZoneActionOutcome
from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.domain.models.run_summary import RunSummary
from dnssec_rollover.domain.models.zone import Zone
from dnssec_rollover.domain.services.phase_decider import decide_phase

logger = get_logger()


class RolloverRunService:
    """Drives every candidate zone through decide, act and sweep.

    Attributes:
        _policy: Rollover policy for this invocation.
        _inventory: Zone and key reader.
        _metadata: Typed marker access.
        _engine: Phase action executor.
        _cleanup: Deactivated-key sweep.
        _time: Time authority.
    """

    def __init__(
        self,
        policy: PolicyParameters,
        key_inventory: KeyInventoryProtocol,
        metadata: RolloverMetadataService,
        engine: RolloverEngine,
        cleanup: CleanupSweep,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        """Initialize the run service.

        Args:
            policy: Rollover policy for this invocation.
            key_inventory: Zone and key reader.
            metadata: Typed marker access.
            engine: Phase action executor.
            cleanup: Deactivated-key sweep.
            time_authority: Source of the current time.
        """
        self._policy = policy
        self._inventory = key_inventory
        self._metadata = metadata
        self._engine = engine
        self._cleanup = cleanup
        self._time = time_authority

    async def run(self) -> RunSummary:
        """Process every zone holding an active key.

        Returns:
            RunSummary with the counters of this invocation.

        Raises:
            StorageError: If the candidate zones cannot be listed at all.
        """
        summary = RunSummary()
        zones = await self._inventory.list_zones_with_active_keys()
        if not zones:
            logger.info("no_zones_with_active_keys")
            return summary

        logger.info("rollover_run_started", zone_count=len(zones))
        for zone in zones:
            await self.process_zone(zone, summary)
        logger.info("rollover_run_finished", **summary.as_dict())
        return summary

    async def process_zone(self, zone: Zone, summary: RunSummary) -> None:
        """Decide, act and sweep one zone, folding results into ``summary``.

        Args:
            zone: Zone to process.
            summary: Counters of the current run.
        """
        log = logger.bind(zone=zone.display_name, zone_id=zone.id)

        try:
            outcome = await self._act(zone)
        except RolloverError as e:
            log.warning("zone_processing_failed", error=str(e))
            outcome = ZoneActionOutcome(
                zone_id=zone.id,
                phase=None,
                action=ZoneAction.FAILED,
                reason=str(e),
            )
        summary.record_action(outcome)

        try:
            cleanup = await self._cleanup.sweep(zone)
        except RolloverError as e:
            log.warning("zone_cleanup_failed", error=str(e))
            summary.record_failure()
            return
        summary.record_cleanup(cleanup)
        if cleanup.deleted_key_ids:
            log.debug("zone_cleanup_deleted", deleted_keys=cleanup.deleted_key_ids)

    async def _act(self, zone: Zone) -> ZoneActionOutcome:
        keys = await self._inventory.list_keys(zone.id)
        if not keys:
            logger.debug("zone_has_no_keys", zone=zone.display_name, zone_id=zone.id)
            return ZoneActionOutcome(
                zone_id=zone.id,
                phase=None,
                action=ZoneAction.SKIPPED,
                reason="no keys",
            )

        try:
            metadata = await self._metadata.load(zone.id)
        except MarkerParseError as e:
            logger.warning(
                "rollover_marker_invalid",
                zone=zone.display_name,
                zone_id=zone.id,
                kind=e.kind,
                raw=e.raw,
            )
            return ZoneActionOutcome(
                zone_id=zone.id,
                phase=None,
                action=ZoneAction.SKIPPED,
                reason=str(e),
            )

        decision = decide_phase(self._policy, self._time.now(), metadata, keys)
        return await self._engine.execute(zone, decision, keys)
