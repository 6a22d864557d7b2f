"""System time authority - production TimeAuthorityProtocol."""

from datetime import datetime, timezone

from dnssec_rollover.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Reads the wall clock, always in UTC."""

    def now(self) -> datetime:
        """Return the current UTC time."""
        return datetime.now(timezone.utc)
