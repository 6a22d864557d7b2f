"""Unit tests for the command-line entry point."""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from dnssec_rollover import cli
from dnssec_rollover.application.services.rollover_metadata_service import (
    RolloverMetadataService,
)
from dnssec_rollover.bootstrap.logging import configure_logging
from dnssec_rollover.domain.errors import StorageError
from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.domain.models.zone import Zone
from dnssec_rollover.infrastructure.stubs import (
    AuditSinkStub,
    KeyInventoryStub,
    KeyManagementStub,
    MetadataStoreStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.rollover_wiring import build_run_service


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    for name in ("PDNS_API_HOST", "PDNS_API_KEY", "DATABASE_URL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    # capsys replaces stderr per test; cached loggers would keep the old one
    monkeypatch.setattr(
        cli,
        "configure_logging",
        lambda verbose: configure_logging(verbose=verbose, cache_loggers=False),
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def stub_store() -> MetadataStoreStub:
    return MetadataStoreStub()


@pytest.fixture
def stubbed_build(
    monkeypatch: pytest.MonkeyPatch, stub_store: MetadataStoreStub
) -> KeyManagementStub:
    inventory = KeyInventoryStub()
    inventory.add_zone(Zone(id=1, name="example.com"))
    inventory.add_key(1, flags=257, algorithm_number=13)
    key_management = KeyManagementStub(inventory)

    def build(policy: PolicyParameters, dry_run: bool = False, **_: object):
        return build_run_service(
            policy,
            inventory,
            key_management,
            RolloverMetadataService(stub_store),
            AuditSinkStub(),
            FakeTimeAuthority(),
            dry_run=dry_run,
        )

    monkeypatch.setattr(cli, "build_rollover_run_service", build)
    return key_management


def test_parse_args_defaults() -> None:
    args = cli.parse_args([])
    assert not args.dry_run
    assert not args.verbose


def test_parse_args_flags() -> None:
    args = cli.parse_args(["--dry-run", "-v"])
    assert args.dry_run
    assert args.verbose


def test_missing_api_configuration_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "rollover_setup_failed" in captured.err


def test_run_prints_summary(
    stubbed_build: KeyManagementStub,
    stub_store: MetadataStoreStub,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert cli.main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Rollover summary: initiated=0 completed=0 baselined=1 skipped=0 deleted=0 failed=0"
    ]
    assert stub_store.write_count == 1


def test_dry_run_prints_notice_and_writes_nothing(
    stubbed_build: KeyManagementStub,
    stub_store: MetadataStoreStub,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert cli.main(["--dry-run"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == cli.DRY_RUN_NOTICE
    assert out[0].startswith("Rollover summary: initiated=0 completed=0 baselined=1")
    assert stub_store.write_count == 0
    assert stubbed_build.calls == []


def test_zone_listing_failure_exits_1(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    class BrokenService:
        async def run(self):
            raise StorageError("database unavailable")

    monkeypatch.setattr(cli, "build_rollover_run_service", lambda *a, **k: BrokenService())

    assert cli.main([]) == 1
    assert capsys.readouterr().out == ""
