"""PowerDNS HTTP API client for cryptokey management.

Implements KeyManagementProtocol against the PowerDNS authoritative
server's REST API. The server generates and stores all key material;
this client only asks for keys to be created, toggled or removed.

Endpoints (relative to ``<host>:<port>/api/v1``):
    POST   /servers/{server_id}/zones/{zone}/cryptokeys
    PUT    /servers/{server_id}/zones/{zone}/cryptokeys/{key_id}
    DELETE /servers/{server_id}/zones/{zone}/cryptokeys/{key_id}

Every failure, whether an HTTP error status or a transport problem, is
raised as KeyManagementError so callers handle a single exception type.

Usage:
    client = PdnsApiClient(PdnsApiConfig.from_environment())
    created = await client.create_key("example.com", CreateKeyRequest("csk", "ECDSAP256SHA256"))
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError
from structlog import get_logger

from dnssec_rollover.application.ports.key_management import (
    CreatedKey,
    CreateKeyRequest,
    KeyManagementProtocol,
)
from dnssec_rollover.config.pdns_api_config import PdnsApiConfig
from dnssec_rollover.domain.errors import KeyManagementError

logger = get_logger()


class CryptokeyDescriptor(BaseModel):
    """Cryptokey object as returned by the PowerDNS API.

    Only the fields the job reads are declared; the rest of the payload
    is ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    keytype: str
    active: bool
    algorithm: str | None = None
    bits: int | None = None
    dnskey: str | None = None
    ds: list[str] | None = None

    def to_created_key(self) -> CreatedKey:
        """Convert to the port's CreatedKey."""
        return CreatedKey(
            id=self.id,
            keytype=self.keytype,
            active=self.active,
            algorithm=self.algorithm,
        )


def canonical_zone(zone_name: str) -> str:
    """Return the zone name with exactly one trailing dot."""
    return zone_name.rstrip(".") + "."


class PdnsApiClient(KeyManagementProtocol):
    """Client for the PowerDNS cryptokeys API.

    Attributes:
        config: Connection settings.
    """

    def __init__(
        self,
        config: PdnsApiConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: PowerDNS API configuration.
            transport: Optional httpx transport (tests pass a MockTransport).
        """
        self.config = config
        self._base_url = config.base_url
        self._timeout = httpx.Timeout(
            config.timeout_seconds, connect=config.connect_timeout_seconds
        )
        self._transport = transport

    def _cryptokeys_path(self, zone_name: str, key_id: int | None = None) -> str:
        zone = quote(canonical_zone(zone_name), safe="")
        path = f"/servers/{self.config.server_id}/zones/{zone}/cryptokeys"
        if key_id is not None:
            path = f"{path}/{key_id}"
        return path

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one API request and map failures to KeyManagementError.

        Raises:
            KeyManagementError: On HTTP status >= 400 or any transport error.
        """
        headers = {
            "X-API-Key": self.config.api_key,
            "Accept": "application/json",
        }
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, json=payload, headers=headers)
            except httpx.TimeoutException as e:
                raise KeyManagementError(
                    f"PowerDNS API request timed out: {method} {path}",
                    status_code=0,
                ) from e
            except httpx.RequestError as e:
                raise KeyManagementError(
                    f"PowerDNS API request failed: {e}",
                    status_code=0,
                ) from e

        if response.status_code >= 400:
            raise self._error_from_response(response)
        return response

    @staticmethod
    def _error_from_response(response: httpx.Response) -> KeyManagementError:
        try:
            detail: Any = response.json()
        except ValueError:
            detail = response.text

        if isinstance(detail, dict) and detail.get("error"):
            error_text = str(detail["error"])
        else:
            error_text = response.text or response.reason_phrase
        return KeyManagementError(
            f"PowerDNS API error {response.status_code} - {error_text}",
            status_code=response.status_code,
            detail=detail,
        )

    async def create_key(self, zone_name: str, request: CreateKeyRequest) -> CreatedKey:
        """Create a new, active signing key for a zone.

        Args:
            zone_name: Zone to add the key to.
            request: Key parameters.

        Returns:
            CreatedKey describing the server's new key.

        Raises:
            KeyManagementError: If the call fails or the response is malformed.
        """
        payload = {**request.to_dict(), "active": True}
        response = await self._request("POST", self._cryptokeys_path(zone_name), payload)
        try:
            descriptor = CryptokeyDescriptor.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise KeyManagementError(
                "PowerDNS API returned an unreadable cryptokey",
                status_code=response.status_code,
                detail=response.text,
            ) from e

        logger.debug(
            "pdns_key_created",
            zone=zone_name,
            key_id=descriptor.id,
            keytype=descriptor.keytype,
            algorithm=descriptor.algorithm,
        )
        return descriptor.to_created_key()

    async def set_key_active(self, zone_name: str, key_id: int, active: bool) -> None:
        """Activate or deactivate a key.

        Raises:
            KeyManagementError: If the call fails.
        """
        await self._request(
            "PUT",
            self._cryptokeys_path(zone_name, key_id),
            {"active": active},
        )

    async def delete_key(self, zone_name: str, key_id: int) -> None:
        """Delete a key.

        Raises:
            KeyManagementError: If the call fails.
        """
        await self._request("DELETE", self._cryptokeys_path(zone_name, key_id))
