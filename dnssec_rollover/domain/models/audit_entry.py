"""Audit entry model for rollover actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Event types written by the rollover job
ROLLOVER_START_EVENT = "DNSSEC_KEY_ROLLOVER_START"
ROLLOVER_COMPLETE_EVENT = "DNSSEC_KEY_ROLLOVER_COMPLETE"
KEY_DELETE_EVENT = "DNSSEC_KEY_DELETE"

DOMAINS_TABLE = "domains"
CRYPTOKEYS_TABLE = "cryptokeys"


@dataclass(frozen=True)
class AuditEntry:
    """One append-only audit record.

    Attributes:
        event_type: Action performed, e.g. ``DNSSEC_KEY_DELETE``.
        target_table: Table of the affected record.
        target_id: Id of the affected record.
        detail: Free-form structured context (zone name, key ids, ...).
        occurred_at: When the action happened (UTC).
        actor_id: Acting user; None for the scheduled job.
        old_value: Previous values, if relevant.
        new_value: New values, if relevant.
        source_ip: Originating address; None for the scheduled job.
    """

    event_type: str
    target_table: str
    target_id: int
    detail: dict[str, Any]
    occurred_at: datetime
    actor_id: int | None = None
    old_value: dict[str, Any] | None = None
    new_value: dict[str, Any] | None = None
    source_ip: str | None = field(default=None)
