"""Unit tests for RolloverMetadataService over the in-memory store."""

from datetime import date, datetime, timezone

import pytest

from dnssec_rollover.application.services.rollover_metadata_service import (
    RolloverMetadataService,
)
from dnssec_rollover.domain.errors import MarkerParseError
from dnssec_rollover.infrastructure.stubs import MetadataStoreStub

NOW = datetime(2026, 4, 2, 3, 0, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_load_empty_zone(metadata: RolloverMetadataService) -> None:
    record = await metadata.load(1)
    assert record.baseline_date is None
    assert record.rollover_started_at is None
    assert record.hold_override_days is None


@pytest.mark.asyncio
async def test_load_all_markers(
    metadata: RolloverMetadataService, metadata_store: MetadataStoreStub
) -> None:
    await metadata_store.set(1, "PDNSCONSOLE-ROLLDATE", "2026-01-01")
    await metadata_store.set(1, "PDNSCONSOLE-ROLLSTART", "2026-04-01 03:00:00")
    await metadata_store.set(1, "PDNSCONSOLE-HOLD", "10")

    record = await metadata.load(1)

    assert record.baseline_date == date(2026, 1, 1)
    assert record.rollover_started_at == datetime(2026, 4, 1, 3, tzinfo=timezone.utc)
    assert record.hold_override_days == 10


@pytest.mark.asyncio
async def test_load_invalid_hold_raises(
    metadata: RolloverMetadataService, metadata_store: MetadataStoreStub
) -> None:
    await metadata_store.set(1, "PDNSCONSOLE-ROLLDATE", "2026-01-01")
    await metadata_store.set(1, "PDNSCONSOLE-ROLLSTART", "2026-04-01 03:00:00")
    await metadata_store.set(1, "PDNSCONSOLE-HOLD", "-3")

    with pytest.raises(MarkerParseError) as exc_info:
        await metadata.load(1)
    assert exc_info.value.kind == "PDNSCONSOLE-HOLD"


@pytest.mark.asyncio
async def test_load_without_baseline_ignores_other_markers(
    metadata: RolloverMetadataService, metadata_store: MetadataStoreStub
) -> None:
    await metadata_store.set(1, "PDNSCONSOLE-ROLLSTART", "not a timestamp")
    await metadata_store.set(1, "PDNSCONSOLE-HOLD", "abc")

    record = await metadata.load(1)

    assert record.baseline_date is None
    assert record.rollover_started_at is None
    assert record.hold_override_days is None


@pytest.mark.asyncio
async def test_load_reads_hold_only_while_rollover_in_progress(
    metadata: RolloverMetadataService, metadata_store: MetadataStoreStub
) -> None:
    await metadata_store.set(1, "PDNSCONSOLE-ROLLDATE", "2026-01-01")
    await metadata_store.set(1, "PDNSCONSOLE-HOLD", "abc")

    record = await metadata.load(1)

    assert record.baseline_date == date(2026, 1, 1)
    assert record.hold_override_days is None


@pytest.mark.asyncio
async def test_record_rollover_start_and_completion(
    metadata: RolloverMetadataService, metadata_store: MetadataStoreStub
) -> None:
    await metadata.record_baseline(1, date(2026, 1, 1))
    await metadata.record_rollover_start(1, NOW)
    assert metadata_store.values[(1, "PDNSCONSOLE-ROLLSTART")] == "2026-04-02 03:00:00"

    await metadata.record_completion(1, date(2026, 4, 9), [3, 4], NOW)

    assert metadata_store.kinds_for(1) == {
        "PDNSCONSOLE-ROLLDATE",
        "PDNSCONSOLE-OLDKEY-3-DEACTIVATED",
        "PDNSCONSOLE-OLDKEY-4-DEACTIVATED",
    }
    assert metadata_store.values[(1, "PDNSCONSOLE-ROLLDATE")] == "2026-04-09"


@pytest.mark.asyncio
async def test_clear_deactivation(
    metadata: RolloverMetadataService, metadata_store: MetadataStoreStub
) -> None:
    await metadata_store.set(1, "PDNSCONSOLE-OLDKEY-4-DEACTIVATED", "2026-03-01 03:00:00")
    await metadata.clear_deactivation(1, 4)
    assert await metadata.get_deactivated_at(1, 4) is None
