"""Per-zone and per-key outcome records.

Actions that touch several keys never stop at the first failure. Each key
call yields a ``KeyActionResult`` and the caller inspects the collected
results afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from dnssec_rollover.domain.models.rollover_phase import RolloverPhase


class KeyAction(str, Enum):
    """Key-level operation requested from the key API."""

    DEACTIVATE = "deactivate"
    DELETE = "delete"


class ZoneAction(str, Enum):
    """What the engine did with a zone in this run."""

    BASELINED = "baselined"
    INITIATED = "initiated"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class KeyActionResult:
    """Result of one key-level call.

    Attributes:
        key_id: Key the call targeted.
        action: Operation attempted.
        succeeded: Whether the call went through (always True in dry run).
        reason: Failure description when ``succeeded`` is False.
        age_days: Days since deactivation, for deletions.
    """

    key_id: int
    action: KeyAction
    succeeded: bool
    reason: str | None = None
    age_days: int | None = None

    @classmethod
    def ok(
        cls, key_id: int, action: KeyAction, age_days: int | None = None
    ) -> KeyActionResult:
        """Build a successful result."""
        return cls(key_id=key_id, action=action, succeeded=True, age_days=age_days)

    @classmethod
    def failed(
        cls,
        key_id: int,
        action: KeyAction,
        reason: str,
        age_days: int | None = None,
    ) -> KeyActionResult:
        """Build a failed result."""
        return cls(
            key_id=key_id,
            action=action,
            succeeded=False,
            reason=reason,
            age_days=age_days,
        )


@dataclass(frozen=True)
class ZoneActionOutcome:
    """Result of executing a zone's phase action.

    Attributes:
        zone_id: Zone processed.
        phase: Phase the action was derived from (None if undecidable).
        action: What was done.
        key_results: Per-key results of a completion.
        reason: Why the zone was skipped or failed, if it was.
    """

    zone_id: int
    phase: RolloverPhase | None
    action: ZoneAction
    key_results: tuple[KeyActionResult, ...] = field(default_factory=tuple)
    reason: str | None = None

    @property
    def deactivated_key_ids(self) -> list[int]:
        """Ids of keys successfully deactivated by this action."""
        return [
            r.key_id
            for r in self.key_results
            if r.succeeded and r.action == KeyAction.DEACTIVATE
        ]

    @property
    def failed_key_count(self) -> int:
        """Number of key calls that failed."""
        return sum(1 for r in self.key_results if not r.succeeded)


@dataclass(frozen=True)
class CleanupOutcome:
    """Result of one zone's cleanup sweep."""

    zone_id: int
    results: tuple[KeyActionResult, ...] = field(default_factory=tuple)

    @property
    def deleted_key_ids(self) -> list[int]:
        """Ids of keys deleted by the sweep."""
        return [r.key_id for r in self.results if r.succeeded]

    @property
    def failed_count(self) -> int:
        """Number of deletions that failed."""
        return sum(1 for r in self.results if not r.succeeded)
