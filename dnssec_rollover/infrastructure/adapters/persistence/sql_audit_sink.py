"""SQL audit sink over the console's ``audit_log`` table.

The key action being audited has already happened when an entry is
appended, so an insert failure is logged as a warning and swallowed.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from dnssec_rollover.application.ports.audit_sink import AuditSinkProtocol
from dnssec_rollover.domain.models.audit_entry import AuditEntry

logger = get_logger()


def _encode(value: dict[str, Any] | None) -> str | None:
    """JSON-encode a value column; empty values are stored as NULL."""
    if not value:
        return None
    return json.dumps(value, ensure_ascii=False, default=str)


def _naive_utc(moment: datetime) -> datetime:
    """Drop tzinfo after converting to UTC (audit_log uses a naive column)."""
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


class SqlAuditSink(AuditSinkProtocol):
    """AuditSinkProtocol over ``audit_log``.

    Attributes:
        _session_factory: SQLAlchemy async session factory for DB access.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def append(self, entry: AuditEntry) -> None:
        """Insert one audit row; failures are logged, never raised."""
        params = {
            "user_id": entry.actor_id,
            "action": entry.event_type,
            "table_name": entry.target_table,
            "record_id": entry.target_id,
            "old_values": _encode(entry.old_value),
            "new_values": _encode(entry.new_value),
            "ip_address": entry.source_ip,
            "metadata": _encode(entry.detail),
            "created_at": _naive_utc(entry.occurred_at),
        }
        try:
            async with self._session_factory() as session, session.begin():
                await session.execute(
                    text("""
                        INSERT INTO audit_log
                            (user_id, action, table_name, record_id, old_values,
                             new_values, ip_address, metadata, created_at)
                        VALUES
                            (:user_id, :action, :table_name, :record_id, :old_values,
                             :new_values, :ip_address, :metadata, :created_at)
                    """),
                    params,
                )
        except SQLAlchemyError as e:
            logger.warning(
                "audit_log_write_failed",
                action=entry.event_type,
                table_name=entry.target_table,
                record_id=entry.target_id,
                error=str(e),
            )
