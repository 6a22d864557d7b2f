"""Phase decider domain service.

Maps a zone's markers and key list onto exactly one ``RolloverPhase``.
The function is pure: it reads its arguments only, performs no I/O and
never looks at the wall clock, so every branch is testable with plain
values.

Decision order:
    1. No baseline date                         -> UNINITIALIZED
    2. Rollover start recorded:
         age >= effective hold                  -> READY_TO_COMPLETE
         otherwise                              -> IN_HOLD
    3. Days since baseline >= interval and
       exactly one active key                   -> ELIGIBLE_FOR_INITIATION
    4. Otherwise                                -> STABLE

A zone with several active keys and no rollover in progress stays STABLE;
the job never tries to reduce it to a single active key.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, time, timezone

from dnssec_rollover.domain.models.rollover_metadata import RolloverMetadata
from dnssec_rollover.domain.models.rollover_phase import PhaseDecision, RolloverPhase
from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.domain.models.signing_key import SigningKey

SECONDS_PER_DAY = 86400


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Count complete 24-hour periods between two instants.

    The result is absolute, so a marker that lies in the future (clock
    skew, manual edits) still yields a non-negative age.

    Args:
        earlier: Start instant.
        later: End instant.

    Returns:
        Number of whole days between the two.

    Examples:
        >>> from datetime import timedelta
        >>> t = datetime(2026, 1, 1, tzinfo=timezone.utc)
        >>> whole_days_between(t, t + timedelta(days=7, hours=23))
        7
    """
    seconds = abs((later - earlier).total_seconds())
    return int(seconds // SECONDS_PER_DAY)


def decide_phase(
    policy: PolicyParameters,
    now: datetime,
    metadata: RolloverMetadata,
    keys: Sequence[SigningKey],
) -> PhaseDecision:
    """Decide the rollover phase of one zone.

    Args:
        policy: Rollover policy for this invocation.
        now: Current instant (timezone-aware).
        metadata: The zone's rollover markers.
        keys: The zone's signing keys.

    Returns:
        PhaseDecision carrying the phase and the figures it was based on.
    """
    active_count = sum(1 for key in keys if key.active)

    if metadata.baseline_date is None:
        return PhaseDecision(
            phase=RolloverPhase.UNINITIALIZED,
            active_key_count=active_count,
        )

    if metadata.rollover_started_at is not None:
        effective_hold = (
            metadata.hold_override_days
            if metadata.hold_override_days is not None
            else policy.hold_period_days
        )
        age_days = whole_days_between(metadata.rollover_started_at, now)
        phase = (
            RolloverPhase.READY_TO_COMPLETE
            if age_days >= effective_hold
            else RolloverPhase.IN_HOLD
        )
        return PhaseDecision(
            phase=phase,
            active_key_count=active_count,
            hold_age_days=age_days,
            effective_hold_days=effective_hold,
        )

    baseline = datetime.combine(
        metadata.baseline_date, time.min, tzinfo=now.tzinfo or timezone.utc
    )
    since_days = whole_days_between(baseline, now)
    if since_days >= policy.rollover_interval_days and active_count == 1:
        phase = RolloverPhase.ELIGIBLE_FOR_INITIATION
    else:
        phase = RolloverPhase.STABLE
    return PhaseDecision(
        phase=phase,
        active_key_count=active_count,
        days_since_baseline=since_days,
    )
