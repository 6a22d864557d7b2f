"""Domain models for the rollover job.

Contains value objects and records that represent zones, signing keys,
rollover markers and run results. These models contain no infrastructure
dependencies.
"""

from dnssec_rollover.domain.models.audit_entry import AuditEntry
from dnssec_rollover.domain.models.rollover_metadata import RolloverMetadata
from dnssec_rollover.domain.models.rollover_outcome import (
    CleanupOutcome,
    KeyAction,
    KeyActionResult,
    ZoneAction,
    ZoneActionOutcome,
)
from dnssec_rollover.domain.models.rollover_phase import PhaseDecision, RolloverPhase
from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.domain.models.run_summary import RunSummary
from dnssec_rollover.domain.models.signing_key import KeyType, SigningKey
from dnssec_rollover.domain.models.zone import Zone

__all__: list[str] = [
    "AuditEntry",
    "CleanupOutcome",
    "KeyAction",
    "KeyActionResult",
    "KeyType",
    "PhaseDecision",
    "PolicyParameters",
    "RolloverMetadata",
    "RolloverPhase",
    "RunSummary",
    "SigningKey",
    "Zone",
    "ZoneAction",
    "ZoneActionOutcome",
]
