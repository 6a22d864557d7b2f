"""Bootstrap wiring for the rollover run.

Builds every collaborator of RolloverRunService from the environment.
Construction failures surface as ConfigurationError before any zone is
touched.

Usage:
    service = build_rollover_run_service(policy, dry_run=args.dry_run)
    summary = await service.run()
"""

from __future__ import annotations

from collections.abc import Mapping

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from dnssec_rollover.application.ports.time_authority import TimeAuthorityProtocol
from dnssec_rollover.application.services.cleanup_sweep import CleanupSweep
from dnssec_rollover.application.services.rollover_engine import RolloverEngine
from dnssec_rollover.application.services.rollover_metadata_service import (
    RolloverMetadataService,
)
from dnssec_rollover.application.services.rollover_run_service import RolloverRunService
from dnssec_rollover.bootstrap.database import get_session_factory
from dnssec_rollover.config.pdns_api_config import PdnsApiConfig
from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.infrastructure.adapters.pdns_api_client import PdnsApiClient
from dnssec_rollover.infrastructure.adapters.persistence import (
    SqlAuditSink,
    SqlKeyInventory,
    SqlMetadataStore,
)
from dnssec_rollover.infrastructure.adapters.time_authority import SystemTimeAuthority

logger = get_logger()


def build_rollover_run_service(
    policy: PolicyParameters,
    dry_run: bool = False,
    environ: Mapping[str, str] | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
) -> RolloverRunService:
    """Wire the production run service.

    Args:
        policy: Rollover policy for this invocation.
        dry_run: Replace every mutation with a log line.
        environ: Environment mapping; the process environment if omitted.
        session_factory: Pre-built session factory (DATABASE_URL otherwise).
        transport: Optional httpx transport for the API client.
        time_authority: Clock; the system clock if omitted.

    Returns:
        A ready RolloverRunService.

    Raises:
        ConfigurationError: If the API client or the database cannot be set up.
    """
    api_client = PdnsApiClient(PdnsApiConfig.from_environment(environ), transport=transport)
    if session_factory is None:
        session_factory = get_session_factory(environ)

    clock = time_authority or SystemTimeAuthority()
    inventory = SqlKeyInventory(session_factory)
    metadata = RolloverMetadataService(SqlMetadataStore(session_factory))
    audit = SqlAuditSink(session_factory)

    engine = RolloverEngine(
        policy=policy,
        key_management=api_client,
        metadata=metadata,
        audit_sink=audit,
        time_authority=clock,
        dry_run=dry_run,
    )
    cleanup = CleanupSweep(
        policy=policy,
        key_inventory=inventory,
        key_management=api_client,
        metadata=metadata,
        audit_sink=audit,
        time_authority=clock,
        dry_run=dry_run,
    )
    logger.debug(
        "rollover_service_wired",
        api_base_url=api_client.config.base_url,
        dry_run=dry_run,
    )
    return RolloverRunService(
        policy=policy,
        key_inventory=inventory,
        metadata=metadata,
        engine=engine,
        cleanup=cleanup,
        time_authority=clock,
    )


__all__ = ["build_rollover_run_service"]
