"""Rollover marker model and its string encoding.

Rollover progress is persisted as PowerDNS domain metadata rows, one row per
marker kind. This module is the single place that knows the kind names and
the on-disk formats; everything else works with the typed
``RolloverMetadata`` record.

Marker kinds:
    PDNSCONSOLE-ROLLDATE
        Date (``YYYY-MM-DD``) of the last completed rollover, or the
        baseline written on first sighting.
    PDNSCONSOLE-ROLLSTART
        Timestamp (``YYYY-MM-DD HH:MM:SS``, UTC) when the new key was
        introduced. Present only while a rollover is in progress.
    PDNSCONSOLE-HOLD
        Optional per-zone hold period override, in whole days.
    PDNSCONSOLE-OLDKEY-<id>-DEACTIVATED
        Timestamp when the job deactivated key <id>. Removed when the key
        is deleted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

from dnssec_rollover.domain.errors import MarkerParseError

ROLLDATE_KIND = "PDNSCONSOLE-ROLLDATE"
ROLLSTART_KIND = "PDNSCONSOLE-ROLLSTART"
HOLD_KIND = "PDNSCONSOLE-HOLD"

DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def deactivation_kind(key_id: int) -> str:
    """Metadata kind of the deactivation marker for one key."""
    return f"PDNSCONSOLE-OLDKEY-{key_id}-DEACTIVATED"


def format_date(value: date) -> str:
    """Encode a baseline date."""
    return value.strftime(DATE_FORMAT)


def format_timestamp(value: datetime) -> str:
    """Encode a timestamp marker in UTC, second precision."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


def parse_date(zone_id: int, kind: str, raw: str) -> date:
    """Decode a date marker.

    A full timestamp is accepted as well; its date part is used.

    Raises:
        MarkerParseError: If the value is not a date.
    """
    text = raw.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise MarkerParseError(zone_id, kind, raw) from e


def parse_timestamp(zone_id: int, kind: str, raw: str) -> datetime:
    """Decode a timestamp marker into an aware UTC datetime.

    Naive values are taken to be UTC.

    Raises:
        MarkerParseError: If the value is not a timestamp.
    """
    try:
        value = datetime.fromisoformat(raw.strip())
    except ValueError as e:
        raise MarkerParseError(zone_id, kind, raw) from e
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_hold_days(zone_id: int, raw: str) -> int:
    """Decode the per-zone hold override.

    Raises:
        MarkerParseError: If the value is not a non-negative integer.
    """
    try:
        days = int(raw.strip())
    except ValueError as e:
        raise MarkerParseError(zone_id, HOLD_KIND, raw) from e
    if days < 0:
        raise MarkerParseError(zone_id, HOLD_KIND, raw)
    return days


@dataclass(frozen=True)
class RolloverMetadata:
    """Typed view of one zone's rollover markers.

    ``baseline_date`` absent means the zone has never been seen.
    ``rollover_started_at`` present means a rollover is in progress; a
    completed rollover clears it and moves the baseline to the completion
    date. Fields are filled only as far as the phase decision reads them:
    without a baseline the other markers are left unset, and the hold
    override is read only while a rollover is in progress.

    Attributes:
        zone_id: Zone the markers belong to.
        baseline_date: Date of the last completed rollover or first sighting.
        rollover_started_at: When the current rollover introduced its new key.
        hold_override_days: Per-zone hold period, overriding the policy.
    """

    zone_id: int
    baseline_date: date | None = None
    rollover_started_at: datetime | None = None
    hold_override_days: int | None = None
