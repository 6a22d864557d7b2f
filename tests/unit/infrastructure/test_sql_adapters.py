"""Unit tests for the SQL adapters against an in-memory SQLite database."""

import json
from collections.abc import AsyncIterator
from datetime import datetime, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from dnssec_rollover.domain.errors import StorageError
from dnssec_rollover.domain.models.audit_entry import AuditEntry
from dnssec_rollover.infrastructure.adapters.persistence import (
    SqlAuditSink,
    SqlKeyInventory,
    SqlMetadataStore,
)
from tests.helpers.pdns_schema import create_pdns_engine


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = await create_pdns_engine()
    async with engine.begin() as conn:
        await conn.execute(
            text(
                "INSERT INTO domains (id, name) VALUES "
                "(1, 'example.com'), (2, 'idle.example'), (3, 'other.example')"
            )
        )
        await conn.execute(
            text("""
                INSERT INTO cryptokeys (id, domain_id, flags, active, content) VALUES
                    (11, 1, 256, 1, '256 3 13 zsk'),
                    (10, 1, 257, 1, '257 3 13 ksk'),
                    (12, 2, 257, 0, '257 3 8 old'),
                    (13, 3, 257, 1, '257 3 15 ed')
            """)
        )
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


class TestSqlKeyInventory:
    @pytest.mark.asyncio
    async def test_lists_only_zones_with_active_keys(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        zones = await SqlKeyInventory(session_factory).list_zones_with_active_keys()
        assert [(z.id, z.name) for z in zones] == [(1, "example.com"), (3, "other.example")]

    @pytest.mark.asyncio
    async def test_lists_keys_ascending(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        keys = await SqlKeyInventory(session_factory).list_keys(1)
        assert [k.id for k in keys] == [10, 11]
        assert keys[0].active is True
        assert keys[0].algorithm == "ECDSAP256SHA256"
        assert keys[1].keytype.value == "zsk"

    @pytest.mark.asyncio
    async def test_unknown_zone_has_no_keys(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        assert await SqlKeyInventory(session_factory).list_keys(99) == []

    @pytest.mark.asyncio
    async def test_database_error_is_wrapped(
        self, engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        async with engine.begin() as conn:
            await conn.execute(text("DROP TABLE cryptokeys"))
        with pytest.raises(StorageError):
            await SqlKeyInventory(session_factory).list_keys(1)


class TestSqlMetadataStore:
    @pytest.mark.asyncio
    async def test_get_missing_returns_none(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        assert await SqlMetadataStore(session_factory).get(1, "PDNSCONSOLE-ROLLDATE") is None

    @pytest.mark.asyncio
    async def test_set_inserts_then_updates(
        self, engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        store = SqlMetadataStore(session_factory)
        await store.set(1, "PDNSCONSOLE-ROLLDATE", "2026-01-01")
        await store.set(1, "PDNSCONSOLE-ROLLDATE", "2026-04-01")

        assert await store.get(1, "PDNSCONSOLE-ROLLDATE") == "2026-04-01"
        async with engine.connect() as conn:
            count = await conn.scalar(
                text("SELECT COUNT(*) FROM domainmetadata WHERE kind = 'PDNSCONSOLE-ROLLDATE'")
            )
        assert count == 1

    @pytest.mark.asyncio
    async def test_markers_are_per_zone(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        store = SqlMetadataStore(session_factory)
        await store.set(1, "PDNSCONSOLE-HOLD", "10")
        assert await store.get(3, "PDNSCONSOLE-HOLD") is None

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        store = SqlMetadataStore(session_factory)
        await store.set(1, "PDNSCONSOLE-ROLLSTART", "2026-01-01 03:00:00")
        await store.delete(1, "PDNSCONSOLE-ROLLSTART")
        await store.delete(1, "PDNSCONSOLE-ROLLSTART")
        assert await store.get(1, "PDNSCONSOLE-ROLLSTART") is None


class TestSqlAuditSink:
    @pytest.mark.asyncio
    async def test_append_writes_json_columns(
        self, engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        entry = AuditEntry(
            event_type="DNSSEC_KEY_DELETE",
            target_table="cryptokeys",
            target_id=12,
            detail={"domain": "idle.example", "age_days": 8},
            occurred_at=datetime(2026, 1, 9, 3, 0, tzinfo=timezone.utc),
        )
        await SqlAuditSink(session_factory).append(entry)

        async with engine.connect() as conn:
            row = (
                await conn.execute(
                    text("SELECT user_id, action, table_name, record_id, old_values, metadata FROM audit_log")
                )
            ).one()
        assert row.user_id is None
        assert row.action == "DNSSEC_KEY_DELETE"
        assert row.table_name == "cryptokeys"
        assert row.record_id == 12
        assert row.old_values is None
        assert json.loads(row.metadata) == {"domain": "idle.example", "age_days": 8}

    @pytest.mark.asyncio
    async def test_append_failure_is_swallowed(
        self, engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        async with engine.begin() as conn:
            await conn.execute(text("DROP TABLE audit_log"))

        await SqlAuditSink(session_factory).append(
            AuditEntry(
                event_type="DNSSEC_KEY_ROLLOVER_START",
                target_table="domains",
                target_id=1,
                detail={},
                occurred_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            )
        )
