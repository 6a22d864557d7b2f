"""Tests for the FakeTimeAuthority test helper.

Every phase test leans on this clock, so its arithmetic is pinned here.
"""

from datetime import datetime, timedelta, timezone

import pytest

from dnssec_rollover.application.ports.time_authority import TimeAuthorityProtocol
from tests.helpers.fake_time_authority import FakeTimeAuthority


class TestFakeTimeAuthority:
    """Tests for the controllable clock."""

    def test_implements_protocol(self) -> None:
        assert isinstance(FakeTimeAuthority(), TimeAuthorityProtocol)

    def test_default_is_new_year_utc(self) -> None:
        assert FakeTimeAuthority().now() == datetime(2026, 1, 1, tzinfo=timezone.utc)

    def test_naive_frozen_time_is_treated_as_utc(self) -> None:
        fake = FakeTimeAuthority(frozen_at=datetime(2026, 3, 1, 12, 0))
        assert fake.now().tzinfo == timezone.utc

    def test_time_does_not_move_on_its_own(self) -> None:
        fake = FakeTimeAuthority()
        assert fake.now() == fake.now()

    def test_advance_days(self) -> None:
        fake = FakeTimeAuthority()
        fake.advance_days(8)
        assert fake.now() == datetime(2026, 1, 9, tzinfo=timezone.utc)

    def test_delta_takes_precedence_over_seconds(self) -> None:
        fake = FakeTimeAuthority()
        fake.advance(seconds=10, delta=timedelta(hours=1))
        assert fake.now() == datetime(2026, 1, 1, 1, 0, tzinfo=timezone.utc)

    def test_advance_requires_an_amount(self) -> None:
        with pytest.raises(ValueError, match="Must provide"):
            FakeTimeAuthority().advance()

    def test_advance_rejects_negative_time(self) -> None:
        with pytest.raises(ValueError, match="backwards"):
            FakeTimeAuthority().advance(seconds=-1)

    def test_set_time_moves_backwards(self) -> None:
        fake = FakeTimeAuthority(frozen_at=datetime(2026, 5, 1, tzinfo=timezone.utc))
        fake.set_time(datetime(2026, 4, 1))
        assert fake.now() == datetime(2026, 4, 1, tzinfo=timezone.utc)
