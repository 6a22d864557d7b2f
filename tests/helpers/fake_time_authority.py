"""FakeTimeAuthority - Controllable time authority for deterministic tests.

Rollover phases are computed from whole days between stored markers and
"now", so every time-dependent test drives the clock explicitly.

Usage Patterns:
--------------

1. Frozen Time Pattern:

    >>> fake_time = FakeTimeAuthority(frozen_at=datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc))
    >>> service = CleanupSweep(..., time_authority=fake_time)
    >>> assert fake_time.now() == datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

2. Simulated Daily Runs:

    >>> fake_time = FakeTimeAuthority()
    >>> fake_time.advance(delta=timedelta(days=1))
    >>> # The next run sees the following day

3. Pytest Fixture Pattern:
    Use the `fake_time_authority` fixture from conftest.py.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from dnssec_rollover.application.ports.time_authority import TimeAuthorityProtocol


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Controllable time authority for deterministic tests.

    Attributes:
        _current_time: The controlled current time.
    """

    def __init__(self, frozen_at: datetime | None = None) -> None:
        """Initialize the fake time authority.

        Args:
            frozen_at: Optional datetime to freeze time at. If not provided,
                defaults to 2026-01-01T00:00:00 UTC for predictable tests.

        Note:
            If frozen_at is timezone-naive, UTC is assumed.
        """
        if frozen_at is None:
            frozen_at = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

        if frozen_at.tzinfo is None:
            frozen_at = frozen_at.replace(tzinfo=timezone.utc)

        self._current_time: datetime = frozen_at

    def now(self) -> datetime:
        """Return the controlled current time.

        Note:
            Time does not advance automatically. Use advance() or set_time()
            to change the returned value.
        """
        return self._current_time

    def advance(
        self,
        seconds: float | int | None = None,
        delta: timedelta | None = None,
    ) -> None:
        """Advance time by the specified amount.

        Args:
            seconds: Number of seconds to advance (int or float).
            delta: A timedelta to advance by. Takes precedence over seconds.

        Raises:
            ValueError: If neither seconds nor delta is provided.
            ValueError: If attempting to advance by negative time.
        """
        if delta is not None:
            advance_seconds = delta.total_seconds()
        elif seconds is not None:
            advance_seconds = float(seconds)
        else:
            raise ValueError("Must provide either 'seconds' or 'delta' argument")

        if advance_seconds < 0:
            raise ValueError(
                f"Cannot advance time backwards. Got {advance_seconds} seconds. "
                "Use set_time() for explicit time changes."
            )

        self._current_time += timedelta(seconds=advance_seconds)

    def advance_days(self, days: int) -> None:
        """Advance time by whole days."""
        self.advance(delta=timedelta(days=days))

    def set_time(self, new_time: datetime) -> None:
        """Set the current time to a specific value.

        Args:
            new_time: The new current time. If naive, UTC is assumed.
        """
        if new_time.tzinfo is None:
            new_time = new_time.replace(tzinfo=timezone.utc)
        self._current_time = new_time
