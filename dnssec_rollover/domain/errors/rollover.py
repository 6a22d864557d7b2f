"""Rollover failure exceptions.

Failure classes and how the run treats them:
- ConfigurationError: fatal, raised before any zone is processed
- KeyManagementError: one PowerDNS API call failed; recovered per key/zone
- MarkerParseError: a stored marker is unreadable; the zone is skipped
- StorageError: a backend database call failed; the zone is skipped
"""

from __future__ import annotations

from typing import Any

from dnssec_rollover.domain.exceptions import RolloverError


class ConfigurationError(RolloverError):
    """Raised when a required collaborator cannot be constructed.

    This aborts the whole invocation with a non-zero exit status.
    """

    pass


class KeyManagementError(RolloverError):
    """Raised when a create/activate/delete call to the key API fails.

    The failure is transient from the job's point of view: markers are left
    untouched, so the next scheduled run retries automatically.

    Attributes:
        status_code: HTTP status code, or 0 for transport failures.
        detail: Error text returned by the API, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        detail: Any = None,
    ) -> None:
        """Initialize with API failure details.

        Args:
            message: Error description.
            status_code: HTTP status code (0 when no response was received).
            detail: Decoded error body, if any.
        """
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class MarkerParseError(RolloverError):
    """Raised when a stored rollover marker cannot be parsed."""

    def __init__(self, zone_id: int, kind: str, raw: str) -> None:
        """Initialize with the offending marker.

        Args:
            zone_id: Zone the marker belongs to.
            kind: Metadata kind of the marker.
            raw: The unparseable stored value.
        """
        super().__init__(f"Invalid {kind} marker for zone {zone_id}: {raw!r}")
        self.zone_id = zone_id
        self.kind = kind
        self.raw = raw


class StorageError(RolloverError):
    """Raised when reading or writing the backend database fails."""

    pass
