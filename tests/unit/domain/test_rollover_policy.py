"""Unit tests for PolicyParameters validation."""

import pytest

from dnssec_rollover.domain.models.rollover_policy import PolicyParameters
from dnssec_rollover.domain.models.signing_key import KeyType


def test_defaults() -> None:
    policy = PolicyParameters()
    assert policy.rollover_interval_days == 90
    assert policy.hold_period_days == 7
    assert policy.deletion_grace_days == 7
    assert policy.default_algorithm == "ECDSAP256SHA256"
    assert policy.default_keytype == KeyType.CSK
    assert policy.rsa_bits == 2048


@pytest.mark.parametrize(
    "kwargs",
    [
        {"rollover_interval_days": 0},
        {"hold_period_days": -1},
        {"deletion_grace_days": -1},
        {"rsa_bits": 0},
        {"default_algorithm": ""},
    ],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        PolicyParameters(**kwargs)


def test_policy_is_immutable() -> None:
    policy = PolicyParameters()
    with pytest.raises(AttributeError):
        policy.hold_period_days = 1  # type: ignore[misc]
