"""Minimal PowerDNS generic SQL schema for in-memory SQLite tests."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

SCHEMA = [
    "CREATE TABLE domains (id INTEGER PRIMARY KEY, name VARCHAR(255) NOT NULL)",
    """CREATE TABLE cryptokeys (
        id INTEGER PRIMARY KEY,
        domain_id INT NOT NULL,
        flags INT NOT NULL,
        active BOOL,
        published BOOL DEFAULT 1,
        content TEXT
    )""",
    """CREATE TABLE domainmetadata (
        id INTEGER PRIMARY KEY,
        domain_id INT NOT NULL,
        kind VARCHAR(32),
        content TEXT
    )""",
    """CREATE TABLE audit_log (
        id INTEGER PRIMARY KEY,
        user_id INT,
        action VARCHAR(64) NOT NULL,
        table_name VARCHAR(64),
        record_id INT,
        old_values TEXT,
        new_values TEXT,
        ip_address VARCHAR(45),
        metadata TEXT,
        created_at TIMESTAMP
    )""",
]


async def create_pdns_engine() -> AsyncEngine:
    """Create an in-memory SQLite engine holding the empty schema.

    StaticPool keeps the single in-memory connection alive across sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        for statement in SCHEMA:
            await conn.execute(text(statement))
    return engine
