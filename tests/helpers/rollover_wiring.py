"""Wiring of the rollover services over the in-memory stubs."""

from __future__ import annotations

from dnssec_rollover.application.ports.time_authority import TimeAuthorityProtocol
from dnssec_rollover.application.services.cleanup_sweep import CleanupSweep
from dnssec_rollover.application.services.rollover_engine import RolloverEngine
from dnssec_rollover.application.services.rollover_metadata_service import (
    RolloverMetadataService,
)
from dnssec_rollover.application.services.rollover_run_service import RolloverRunService
from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.infrastructure.stubs import (
    AuditSinkStub,
    KeyInventoryStub,
    KeyManagementStub,
)


def build_run_service(
    policy: PolicyParameters,
    inventory: KeyInventoryStub,
    key_management: KeyManagementStub,
    metadata: RolloverMetadataService,
    audit_sink: AuditSinkStub,
    time_authority: TimeAuthorityProtocol,
    dry_run: bool = False,
) -> RolloverRunService:
    """Wire a run service over the stubs."""
    engine = RolloverEngine(
        policy=policy,
        key_management=key_management,
        metadata=metadata,
        audit_sink=audit_sink,
        time_authority=time_authority,
        dry_run=dry_run,
    )
    cleanup = CleanupSweep(
        policy=policy,
        key_inventory=inventory,
        key_management=key_management,
        metadata=metadata,
        audit_sink=audit_sink,
        time_authority=time_authority,
        dry_run=dry_run,
    )
    return RolloverRunService(
        policy=policy,
        key_inventory=inventory,
        metadata=metadata,
        engine=engine,
        cleanup=cleanup,
        time_authority=time_authority,
    )
