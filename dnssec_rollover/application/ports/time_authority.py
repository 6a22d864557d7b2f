"""Time Authority Protocol - interface for consistent timestamp provisioning.

Every rollover decision compares stored markers against "now". Services
obtain "now" from an injected TimeAuthorityProtocol instead of reading
the system clock directly, so a whole run can be replayed at any instant.

For production:
    Use SystemTimeAuthority from dnssec_rollover/infrastructure/adapters/

For testing:
    Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                now = self._time.now()  # never the system clock
                ...
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time.

        Returns:
            Current datetime, timezone-aware in UTC.
        """
        ...
