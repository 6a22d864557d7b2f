"""Rollover phases and the decision record produced by the phase decider."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RolloverPhase(str, Enum):
    """Closed set of states a zone can be in for one invocation.

    Values:
        UNINITIALIZED: No baseline marker yet; the zone is seen for the first time.
        STABLE: Idle and not yet due (or not in a single-active-key state).
        ELIGIBLE_FOR_INITIATION: Interval elapsed with exactly one active key.
        IN_HOLD: A new key was introduced and the hold period is running.
        READY_TO_COMPLETE: Hold period elapsed; superseded keys can go.
    """

    UNINITIALIZED = "uninitialized"
    STABLE = "stable"
    ELIGIBLE_FOR_INITIATION = "eligible_for_initiation"
    IN_HOLD = "in_hold"
    READY_TO_COMPLETE = "ready_to_complete"


@dataclass(frozen=True)
class PhaseDecision:
    """Outcome of the phase decider for one zone.

    Only ``phase`` drives behaviour; the remaining figures are the inputs
    the decision was based on, kept for logging.

    Attributes:
        phase: The decided phase.
        active_key_count: Number of active keys in the zone.
        days_since_baseline: Whole days since the baseline date (idle zones).
        hold_age_days: Whole days since the rollover started (in progress).
        effective_hold_days: Hold period applied (override or policy).
    """

    phase: RolloverPhase
    active_key_count: int = 0
    days_since_baseline: int | None = None
    hold_age_days: int | None = None
    effective_hold_days: int | None = None

    @property
    def hold_days_remaining(self) -> int | None:
        """Days left before the hold completes, if a rollover is in progress."""
        if self.hold_age_days is None or self.effective_hold_days is None:
            return None
        return max(0, self.effective_hold_days - self.hold_age_days)
