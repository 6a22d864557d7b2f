"""SQL key inventory - reads zones and cryptokeys.

SQL Pattern:
    -- Candidate zones
    SELECT d.id, d.name
    FROM domains d JOIN cryptokeys ck ON ck.domain_id = d.id
    WHERE ck.active = :active
    GROUP BY d.id, d.name

    -- Keys of one zone
    SELECT id, domain_id, active, flags, content
    FROM cryptokeys WHERE domain_id = :zone_id ORDER BY id
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dnssec_rollover.application.ports.key_inventory import KeyInventoryProtocol
from dnssec_rollover.domain.errors import StorageError
from dnssec_rollover.domain.models.signing_key import SigningKey
from dnssec_rollover.domain.models.zone import Zone


class SqlKeyInventory(KeyInventoryProtocol):
    """KeyInventoryProtocol over the PowerDNS tables.

    Attributes:
        _session_factory: SQLAlchemy async session factory for DB access.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_zones_with_active_keys(self) -> list[Zone]:
        """List zones holding at least one active cryptokey, by id.

        Raises:
            StorageError: If the query fails.
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text("""
                        SELECT d.id, d.name
                        FROM domains d
                        JOIN cryptokeys ck ON ck.domain_id = d.id
                        WHERE ck.active = :active
                        GROUP BY d.id, d.name
                        ORDER BY d.id
                    """),
                    {"active": True},
                )
                rows = result.fetchall()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list zones: {e}") from e

        return [Zone(id=int(row.id), name=str(row.name)) for row in rows]

    async def list_keys(self, zone_id: int) -> list[SigningKey]:
        """List a zone's cryptokeys ascending by id.

        Raises:
            StorageError: If the query fails.
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text("""
                        SELECT id, domain_id, active, flags, content
                        FROM cryptokeys
                        WHERE domain_id = :zone_id
                        ORDER BY id ASC
                    """),
                    {"zone_id": zone_id},
                )
                rows = result.fetchall()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list keys of zone {zone_id}: {e}") from e

        return [
            SigningKey(
                id=int(row.id),
                zone_id=int(row.domain_id),
                active=bool(row.active),
                flags=int(row.flags),
                content=row.content or "",
            )
            for row in rows
        ]
