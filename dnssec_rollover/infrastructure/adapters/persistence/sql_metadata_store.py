"""SQL metadata store over PowerDNS ``domainmetadata``.

Markers are plain rows ``(domain_id, kind, content)``. PowerDNS has no
unique constraint on (domain_id, kind), so a write selects first and
then updates or inserts, all inside one transaction.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from dnssec_rollover.application.ports.metadata_store import MetadataStoreProtocol
from dnssec_rollover.domain.errors import StorageError

logger = get_logger()


class SqlMetadataStore(MetadataStoreProtocol):
    """MetadataStoreProtocol over ``domainmetadata``.

    Attributes:
        _session_factory: SQLAlchemy async session factory for DB access.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, zone_id: int, kind: str) -> str | None:
        """Read one marker, or None if absent.

        Raises:
            StorageError: If the query fails.
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text("""
                        SELECT content
                        FROM domainmetadata
                        WHERE domain_id = :zone_id AND kind = :kind
                        ORDER BY id
                    """),
                    {"zone_id": zone_id, "kind": kind},
                )
                row = result.fetchone()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read {kind} for zone {zone_id}: {e}") from e

        return None if row is None else row.content

    async def set(self, zone_id: int, kind: str, value: str) -> None:
        """Create or replace one marker.

        Raises:
            StorageError: If the write fails.
        """
        try:
            async with self._session_factory() as session, session.begin():
                existing = await session.execute(
                    text("""
                        SELECT id
                        FROM domainmetadata
                        WHERE domain_id = :zone_id AND kind = :kind
                    """),
                    {"zone_id": zone_id, "kind": kind},
                )
                row = existing.fetchone()
                if row is not None:
                    await session.execute(
                        text("UPDATE domainmetadata SET content = :content WHERE id = :id"),
                        {"content": value, "id": row.id},
                    )
                else:
                    await session.execute(
                        text("""
                            INSERT INTO domainmetadata (domain_id, kind, content)
                            VALUES (:zone_id, :kind, :content)
                        """),
                        {"zone_id": zone_id, "kind": kind, "content": value},
                    )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write {kind} for zone {zone_id}: {e}") from e

        logger.debug("metadata_written", zone_id=zone_id, kind=kind, value=value)

    async def delete(self, zone_id: int, kind: str) -> None:
        """Remove every row of one marker kind for the zone.

        Raises:
            StorageError: If the delete fails.
        """
        try:
            async with self._session_factory() as session, session.begin():
                await session.execute(
                    text("""
                        DELETE FROM domainmetadata
                        WHERE domain_id = :zone_id AND kind = :kind
                    """),
                    {"zone_id": zone_id, "kind": kind},
                )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete {kind} for zone {zone_id}: {e}") from e

        logger.debug("metadata_deleted", zone_id=zone_id, kind=kind)
