"""PowerDNS HTTP API connection configuration.

Environment Variables:
- PDNS_API_HOST: API host, with or without scheme (required)
- PDNS_API_KEY: API key sent as X-API-Key (required)
- PDNS_API_PORT: API port (default: 8081)
- PDNS_API_SERVER_ID: server-id path segment (default: localhost)
- PDNS_API_TIMEOUT_SECONDS: Request timeout (default: 10)
- PDNS_API_CONNECT_TIMEOUT_SECONDS: Connect timeout (default: 5)
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from dnssec_rollover.config.env import current_environ, get_int_env, get_str_env
from dnssec_rollover.domain.errors import ConfigurationError

DEFAULT_PORT = 8081
DEFAULT_SERVER_ID = "localhost"
DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_CONNECT_TIMEOUT_SECONDS = 5

_SCHEME_RE = re.compile(r"^https?:", re.IGNORECASE)


@dataclass(frozen=True)
class PdnsApiConfig:
    """PowerDNS API connection settings.

    Attributes:
        host: Host name or URL of the API.
        api_key: Plain-text API key.
        port: API port.
        server_id: PowerDNS server-id used in every API path.
        timeout_seconds: Overall request timeout.
        connect_timeout_seconds: Connection establishment timeout.
    """

    host: str
    api_key: str
    port: int = DEFAULT_PORT
    server_id: str = DEFAULT_SERVER_ID
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    connect_timeout_seconds: int = DEFAULT_CONNECT_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        """API root, e.g. ``http://127.0.0.1:8081/api/v1``."""
        scheme = "" if _SCHEME_RE.match(self.host) else "http://"
        return f"{(scheme + self.host).rstrip('/')}:{self.port}/api/v1"

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> PdnsApiConfig:
        """Create the config from environment variables.

        Args:
            environ: Environment mapping; the process environment if omitted.

        Returns:
            PdnsApiConfig with values from the environment or defaults.

        Raises:
            ConfigurationError: If PDNS_API_HOST or PDNS_API_KEY is missing.
        """
        env = current_environ() if environ is None else environ
        host = get_str_env(env, "PDNS_API_HOST", "")
        api_key = get_str_env(env, "PDNS_API_KEY", "")
        if not host or not api_key:
            raise ConfigurationError("PowerDNS API not configured")

        return cls(
            host=host,
            api_key=api_key,
            port=get_int_env(env, "PDNS_API_PORT", DEFAULT_PORT),
            server_id=get_str_env(env, "PDNS_API_SERVER_ID", DEFAULT_SERVER_ID),
            timeout_seconds=get_int_env(
                env, "PDNS_API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS
            ),
            connect_timeout_seconds=get_int_env(
                env, "PDNS_API_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS
            ),
        )
