"""Rollover engine - executes the action implied by a zone's phase.

Phase to action:
    UNINITIALIZED            write today's baseline, no key call
    ELIGIBLE_FOR_INITIATION  create a new key like the active one, mark start
    IN_HOLD                  nothing (hold period still running)
    READY_TO_COMPLETE        deactivate superseded keys, reset baseline
    STABLE                   nothing

Markers are written only after the key API call they describe has
succeeded. A failed create leaves every marker as it was, so the next
scheduled run derives the same phase and retries.

In dry-run mode every key API call and every marker write is replaced by a
log line; the returned outcomes are the ones a real run would produce
against an always-succeeding API.

Usage:
    engine = RolloverEngine(
        policy=policy,
        key_management=client,
        metadata=RolloverMetadataService(store),
        audit_sink=audit,
        time_authority=SystemTimeAuthority(),
    )
    outcome = await engine.execute(zone, decision, keys)
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection, Sequence
from datetime import datetime

from structlog import BoundLogger, get_logger

from dnssec_rollover.application.ports.audit_sink import AuditSinkProtocol
from dnssec_rollover.application.ports.key_management import (
    CreateKeyRequest,
    KeyManagementProtocol,
)
from dnssec_rollover.application.ports.time_authority import TimeAuthorityProtocol
from dnssec_rollover.application.services.rollover_metadata_service import (
    RolloverMetadataService,
)
from dnssec_rollover.domain.errors import KeyManagementError
from dnssec_rollover.domain.models.audit_entry import (
    DOMAINS_TABLE,
    ROLLOVER_COMPLETE_EVENT,
    ROLLOVER_START_EVENT,
    AuditEntry,
)
from dnssec_rollover.domain.models.rollover_outcome import (
    KeyAction,
    KeyActionResult,
    ZoneAction,
    ZoneActionOutcome,
)
from dnssec_rollover.domain.models.rollover_phase import PhaseDecision, RolloverPhase
from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.domain.models.signing_key import KeyType, SigningKey
from dnssec_rollover.domain.models.zone import Zone

logger = get_logger()

RSA_PREFIX = "RSA"


def select_superseded_keys(
    keys: Sequence[SigningKey], marked_key_ids: Collection[int] = ()
) -> list[SigningKey]:
    """Pick the keys a completing rollover deactivates.

    Keys are grouped by (keytype, algorithm). In every group with at least
    two members and one active key, the newest active key (highest id) is
    kept and every other member is superseded, except inactive members
    that already carry a deactivation marker: their deletion clock keeps
    running. An inactive member without a marker was switched off outside
    this job and is picked up so it gets a marker and is deleted later.

    Args:
        keys: All keys of the zone.
        marked_key_ids: Keys that already have a deactivation marker.

    Returns:
        Superseded keys, ascending by id.
    """
    groups: dict[tuple[KeyType, str], list[SigningKey]] = defaultdict(list)
    for key in keys:
        groups[key.group].append(key)

    marked = set(marked_key_ids)
    superseded: list[SigningKey] = []
    for members in groups.values():
        if len(members) < 2:
            continue
        active = [k for k in members if k.active]
        if not active:
            continue
        keeper = max(active, key=lambda k: k.id)
        superseded.extend(
            k
            for k in members
            if k.id != keeper.id and (k.active or k.id not in marked)
        )
    superseded.sort(key=lambda k: k.id)
    return superseded


class RolloverEngine:
    """Executes one zone's phase action.

    Attributes:
        _policy: Rollover policy for this invocation.
        _keys: Key management client.
        _metadata: Typed marker access.
        _audit: Audit sink.
        _time: Time authority.
        _dry_run: Replace every mutation with a log line.
    """

    def __init__(
        self,
        policy: PolicyParameters,
        key_management: KeyManagementProtocol,
        metadata: RolloverMetadataService,
        audit_sink: AuditSinkProtocol,
        time_authority: TimeAuthorityProtocol,
        dry_run: bool = False,
    ) -> None:
        """Initialize the engine.

        Args:
            policy: Rollover policy for this invocation.
            key_management: Key management client.
            metadata: Typed marker access.
            audit_sink: Audit sink.
            time_authority: Source of the current time.
            dry_run: If True, log intended mutations instead of performing them.
        """
        self._policy = policy
        self._keys = key_management
        self._metadata = metadata
        self._audit = audit_sink
        self._time = time_authority
        self._dry_run = dry_run

    async def execute(
        self,
        zone: Zone,
        decision: PhaseDecision,
        keys: Sequence[SigningKey],
    ) -> ZoneActionOutcome:
        """Execute the action for a zone's decided phase.

        Args:
            zone: Zone being processed.
            decision: Output of the phase decider for this zone.
            keys: The zone's keys, read just before the decision.

        Returns:
            ZoneActionOutcome describing what was done.

        Raises:
            StorageError: If a marker write fails after its key call succeeded.
        """
        log = logger.bind(zone=zone.display_name, zone_id=zone.id, phase=decision.phase.value)
        now = self._time.now()

        if decision.phase == RolloverPhase.UNINITIALIZED:
            return await self._baseline(zone, now, log)

        if decision.phase == RolloverPhase.ELIGIBLE_FOR_INITIATION:
            return await self._initiate(zone, keys, now, log)

        if decision.phase == RolloverPhase.READY_TO_COMPLETE:
            return await self._complete(zone, keys, now, log)

        if decision.phase == RolloverPhase.IN_HOLD:
            log.debug(
                "rollover_pending_hold",
                hold_age_days=decision.hold_age_days,
                effective_hold_days=decision.effective_hold_days,
                days_remaining=decision.hold_days_remaining,
            )
        else:
            log.debug(
                "rollover_not_due",
                days_since_baseline=decision.days_since_baseline,
                active_keys=decision.active_key_count,
            )
        return ZoneActionOutcome(
            zone_id=zone.id,
            phase=decision.phase,
            action=ZoneAction.SKIPPED,
        )

    async def _baseline(self, zone: Zone, now: datetime, log: BoundLogger) -> ZoneActionOutcome:
        today = now.date()
        if self._dry_run:
            log.info("dry_run_would_set_baseline", baseline_date=today.isoformat())
        else:
            await self._metadata.record_baseline(zone.id, today)
            log.debug("baseline_set", baseline_date=today.isoformat())
        return ZoneActionOutcome(
            zone_id=zone.id,
            phase=RolloverPhase.UNINITIALIZED,
            action=ZoneAction.BASELINED,
        )

    def _build_create_request(self, keys: Sequence[SigningKey]) -> CreateKeyRequest:
        """Describe a new key matching the zone's current active key."""
        active = [k for k in keys if k.active]
        if active:
            algorithm = active[0].algorithm
            keytype = active[0].keytype.value
        else:
            algorithm = self._policy.default_algorithm
            keytype = self._policy.default_keytype.value
        bits = self._policy.rsa_bits if algorithm.startswith(RSA_PREFIX) else None
        return CreateKeyRequest(keytype=keytype, algorithm=algorithm, bits=bits)

    async def _initiate(
        self,
        zone: Zone,
        keys: Sequence[SigningKey],
        now: datetime,
        log: BoundLogger,
    ) -> ZoneActionOutcome:
        request = self._build_create_request(keys)
        log = log.bind(algorithm=request.algorithm, keytype=request.keytype)

        if self._dry_run:
            log.info("dry_run_would_create_key", bits=request.bits)
            log.info("dry_run_would_mark_rollover_start", started_at=now.isoformat())
        else:
            try:
                created = await self._keys.create_key(zone.name, request)
            except KeyManagementError as e:
                log.warning("key_create_failed", error=str(e), status_code=e.status_code)
                return ZoneActionOutcome(
                    zone_id=zone.id,
                    phase=RolloverPhase.ELIGIBLE_FOR_INITIATION,
                    action=ZoneAction.FAILED,
                    reason=str(e),
                )
            await self._metadata.record_rollover_start(zone.id, now)
            await self._audit.append(
                AuditEntry(
                    event_type=ROLLOVER_START_EVENT,
                    target_table=DOMAINS_TABLE,
                    target_id=zone.id,
                    detail={
                        "domain": zone.display_name,
                        "algorithm": request.algorithm,
                        "keytype": request.keytype,
                        "new_key_id": created.id,
                    },
                    occurred_at=now,
                )
            )
            log = log.bind(new_key_id=created.id)

        log.info("rollover_initiated")
        return ZoneActionOutcome(
            zone_id=zone.id,
            phase=RolloverPhase.ELIGIBLE_FOR_INITIATION,
            action=ZoneAction.INITIATED,
        )

    async def _deactivate(self, zone: Zone, key: SigningKey, log: BoundLogger) -> KeyActionResult:
        if self._dry_run:
            log.info("dry_run_would_deactivate_key", key_id=key.id)
            return KeyActionResult.ok(key.id, KeyAction.DEACTIVATE)
        try:
            await self._keys.set_key_active(zone.name, key.id, False)
        except KeyManagementError as e:
            log.warning("key_deactivation_failed", key_id=key.id, error=str(e))
            return KeyActionResult.failed(key.id, KeyAction.DEACTIVATE, str(e))
        log.debug("key_deactivated", key_id=key.id)
        return KeyActionResult.ok(key.id, KeyAction.DEACTIVATE)

    async def _complete(
        self,
        zone: Zone,
        keys: Sequence[SigningKey],
        now: datetime,
        log: BoundLogger,
    ) -> ZoneActionOutcome:
        marked = await self._metadata.marked_key_ids(
            zone.id, [k.id for k in keys if not k.active]
        )
        results = [
            await self._deactivate(zone, key, log)
            for key in select_superseded_keys(keys, marked)
        ]
        outcome = ZoneActionOutcome(
            zone_id=zone.id,
            phase=RolloverPhase.READY_TO_COMPLETE,
            action=ZoneAction.COMPLETED,
            key_results=tuple(results),
        )
        deactivated = outcome.deactivated_key_ids
        today = now.date()

        if self._dry_run:
            log.info(
                "dry_run_would_mark_rollover_complete",
                baseline_date=today.isoformat(),
                deactivated_keys=deactivated,
            )
        else:
            await self._metadata.record_completion(zone.id, today, deactivated, now)
            await self._audit.append(
                AuditEntry(
                    event_type=ROLLOVER_COMPLETE_EVENT,
                    target_table=DOMAINS_TABLE,
                    target_id=zone.id,
                    detail={
                        "domain": zone.display_name,
                        "deactivated_keys": deactivated,
                    },
                    occurred_at=now,
                )
            )

        log.info(
            "rollover_completed",
            deactivated_keys=deactivated,
            failed_keys=outcome.failed_key_count,
        )
        return outcome
