"""Rollover policy configuration from the environment.

Environment Variables:
- ROLLOVER_INTERVAL_DAYS: Minimum days between completed rollovers (default: 90)
- HOLD_PERIOD_DAYS: Days to hold a new key before pruning old ones (default: 7)
- DELETION_GRACE_DAYS: Days after deactivation before deletion (default: 7)
- DEFAULT_ALGORITHM: Algorithm for zones without a key (default: ECDSAP256SHA256)
- DEFAULT_KEYTYPE: ksk, zsk or csk for zones without a key (default: csk)
- RSA_BITS: Key size, only sent for RSA algorithms (default: 2048)

Invalid or non-positive numbers fall back to their defaults rather than
failing the run. HOLD_PERIOD_DAYS must cover the DS record TTL plus the
parent's update cycle; a shorter hold risks a validation outage.
"""

from __future__ import annotations

from collections.abc import Mapping

from dnssec_rollover.config.env import current_environ, get_int_env, get_str_env
from dnssec_rollover.domain.models.rollover_policy import (
    DEFAULT_ALGORITHM,
    DEFAULT_DELETION_GRACE_DAYS,
    DEFAULT_HOLD_PERIOD_DAYS,
    DEFAULT_KEYTYPE,
    DEFAULT_ROLLOVER_INTERVAL_DAYS,
    DEFAULT_RSA_BITS,
    PolicyParameters,
)
from dnssec_rollover.domain.models.signing_key import KeyType


def policy_from_environment(environ: Mapping[str, str] | None = None) -> PolicyParameters:
    """Create PolicyParameters from environment variables with defaults.

    Args:
        environ: Environment mapping; the process environment if omitted.

    Returns:
        PolicyParameters with values from the environment or defaults.
    """
    env = current_environ() if environ is None else environ

    keytype_name = get_str_env(env, "DEFAULT_KEYTYPE", DEFAULT_KEYTYPE.value).lower()
    try:
        keytype = KeyType(keytype_name)
    except ValueError:
        keytype = DEFAULT_KEYTYPE

    return PolicyParameters(
        rollover_interval_days=get_int_env(
            env, "ROLLOVER_INTERVAL_DAYS", DEFAULT_ROLLOVER_INTERVAL_DAYS
        ),
        hold_period_days=get_int_env(env, "HOLD_PERIOD_DAYS", DEFAULT_HOLD_PERIOD_DAYS),
        deletion_grace_days=get_int_env(
            env, "DELETION_GRACE_DAYS", DEFAULT_DELETION_GRACE_DAYS
        ),
        default_algorithm=get_str_env(env, "DEFAULT_ALGORITHM", DEFAULT_ALGORITHM).upper(),
        default_keytype=keytype,
        rsa_bits=get_int_env(env, "RSA_BITS", DEFAULT_RSA_BITS),
    )


# Default production policy
DEFAULT_POLICY = PolicyParameters()
