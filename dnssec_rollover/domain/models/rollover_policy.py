"""Rollover policy parameters.

An immutable value built once per invocation and passed to every component
that needs it. See ``dnssec_rollover.config.rollover_policy`` for how it is
read from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass

from dnssec_rollover.domain.models.signing_key import KeyType

DEFAULT_ROLLOVER_INTERVAL_DAYS = 90
DEFAULT_HOLD_PERIOD_DAYS = 7
DEFAULT_DELETION_GRACE_DAYS = 7
DEFAULT_ALGORITHM = "ECDSAP256SHA256"
DEFAULT_KEYTYPE = KeyType.CSK
DEFAULT_RSA_BITS = 2048


@dataclass(frozen=True)
class PolicyParameters:
    """Tunables for one rollover invocation.

    Attributes:
        rollover_interval_days: Minimum days between completed rollovers.
        hold_period_days: Days a new key is held before old keys are
            deactivated. Must cover DS TTL plus the parent's update cycle.
        deletion_grace_days: Days a deactivated key is kept before deletion.
        default_algorithm: Algorithm for a new key when the zone has none.
        default_keytype: Key role for a new key when the zone has none.
        rsa_bits: Key size sent with RSA algorithms only.
    """

    rollover_interval_days: int = DEFAULT_ROLLOVER_INTERVAL_DAYS
    hold_period_days: int = DEFAULT_HOLD_PERIOD_DAYS
    deletion_grace_days: int = DEFAULT_DELETION_GRACE_DAYS
    default_algorithm: str = DEFAULT_ALGORITHM
    default_keytype: KeyType = DEFAULT_KEYTYPE
    rsa_bits: int = DEFAULT_RSA_BITS

    def __post_init__(self) -> None:
        """Validate parameter ranges."""
        if self.rollover_interval_days < 1:
            raise ValueError(
                f"rollover_interval_days must be >= 1, got {self.rollover_interval_days}"
            )
        if self.hold_period_days < 0:
            raise ValueError(
                f"hold_period_days must be >= 0, got {self.hold_period_days}"
            )
        if self.deletion_grace_days < 0:
            raise ValueError(
                f"deletion_grace_days must be >= 0, got {self.deletion_grace_days}"
            )
        if self.rsa_bits < 1:
            raise ValueError(f"rsa_bits must be >= 1, got {self.rsa_bits}")
        if not self.default_algorithm:
            raise ValueError("default_algorithm must not be empty")
