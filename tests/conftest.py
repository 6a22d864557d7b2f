"""
Pytest configuration and shared fixtures for the rollover job tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Ports are replaced by the in-memory stubs from dnssec_rollover.infrastructure.stubs
- Time is controlled through FakeTimeAuthority, never the wall clock
- Unit tests go in tests/unit/<layer>/
"""

from datetime import datetime, timezone

import pytest

from dnssec_rollover.application.services.rollover_metadata_service import (
    RolloverMetadataService,
)
from dnssec_rollover.application.services.rollover_run_service import RolloverRunService
from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.infrastructure.stubs import (
    AuditSinkStub,
    KeyInventoryStub,
    KeyManagementStub,
    MetadataStoreStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.rollover_wiring import build_run_service

START_TIME = datetime(2026, 1, 1, 3, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from dnssec_rollover import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Provide a clock frozen at 03:00 UTC on 2026-01-01 (a cron-like hour)."""
    return FakeTimeAuthority(frozen_at=START_TIME)


@pytest.fixture
def policy() -> PolicyParameters:
    """Provide the default rollover policy (90/7/7)."""
    return PolicyParameters()


@pytest.fixture
def inventory() -> KeyInventoryStub:
    return KeyInventoryStub()


@pytest.fixture
def metadata_store() -> MetadataStoreStub:
    return MetadataStoreStub()


@pytest.fixture
def metadata(metadata_store: MetadataStoreStub) -> RolloverMetadataService:
    return RolloverMetadataService(metadata_store)


@pytest.fixture
def key_management(inventory: KeyInventoryStub) -> KeyManagementStub:
    return KeyManagementStub(inventory)


@pytest.fixture
def audit_sink() -> AuditSinkStub:
    return AuditSinkStub()


@pytest.fixture
def run_service(
    policy: PolicyParameters,
    inventory: KeyInventoryStub,
    key_management: KeyManagementStub,
    metadata: RolloverMetadataService,
    audit_sink: AuditSinkStub,
    fake_time_authority: FakeTimeAuthority,
) -> RolloverRunService:
    """Provide a run service wired to the in-memory stubs."""
    return build_run_service(
        policy, inventory, key_management, metadata, audit_sink, fake_time_authority
    )
