"""Auth clients consumed by request execution.

A Client never looks inside its auth client; it only hands the reference
to each Request. At execution time the transport asks the auth client for
headers through ``get_auth_headers()``.
"""

from __future__ import annotations

import base64
import logging
import os
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import ClientConfig

logger = logging.getLogger(__name__)

# Empty dict singleton - avoid allocation on hot path
_EMPTY_HEADERS: dict[str, str] = {}

# Optional gssapi import for Kerberos
try:
    import gssapi
    GSSAPI_AVAILABLE = True
except ImportError:
    gssapi = None  # type: ignore
    GSSAPI_AVAILABLE = False


@dataclass
class BearerTokenAuth:
    """
    Bearer token auth.

    The token is taken from (in order of priority):
    1. the explicit ``token``
    2. the environment variable named by ``token_env``
    3. the file at ``token_file``
    """
    token: str | None = None
    token_env: str | None = "DISCOVERY_JWT"
    token_file: str | None = None

    # Cache for headers (token doesn't change often)
    _cache: dict[str, str] = field(default_factory=dict, repr=False)
    _cache_token: str | None = field(default=None, repr=False)

    def get_auth_headers(self) -> dict[str, str]:
        token = self._get_token()
        if not token:
            return _EMPTY_HEADERS

        if token == self._cache_token and self._cache:
            return self._cache

        self._cache = {"Authorization": f"Bearer {token}"}
        self._cache_token = token
        return self._cache

    def _get_token(self) -> str | None:
        if self.token:
            return self.token

        if self.token_env:
            token = os.environ.get(self.token_env)
            if token:
                return token

        if self.token_file:
            try:
                with open(self.token_file, "r") as f:
                    return f.read().strip()
            except OSError as e:
                logger.warning(f"Failed to read token file: {e}")

        return None


@dataclass
class KerberosAuth:
    """
    Kerberos SPNEGO auth.

    Requires a valid ticket (obtained via kinit) and the ``gssapi`` extra.
    Falls back to no header when negotiation is not possible.
    """
    service_principal: str | None = None

    def get_auth_headers(self) -> dict[str, str]:
        if not GSSAPI_AVAILABLE:
            logger.warning(
                "gssapi not available - install with: pip install discovery-client[auth]"
            )
            return _EMPTY_HEADERS

        if not self.service_principal:
            logger.warning("Kerberos auth requested but no service principal configured")
            return _EMPTY_HEADERS

        try:
            service_name = gssapi.Name(
                self.service_principal,
                name_type=gssapi.NameType.kerberos_principal,
            )
            ctx = gssapi.SecurityContext(name=service_name, usage="initiate")
            token = ctx.step()
        except gssapi.exceptions.GSSError as e:
            logger.warning(f"Kerberos authentication failed: {e}")
            return _EMPTY_HEADERS

        if not token:
            logger.warning("Failed to obtain Kerberos token")
            return _EMPTY_HEADERS

        token_b64 = base64.b64encode(token).decode("ascii")
        return {"Authorization": f"Negotiate {token_b64}"}


@dataclass
class ApiKeyAuth:
    """Static API key sent in a header."""
    key: str
    header: str = "X-API-Key"

    def get_auth_headers(self) -> dict[str, str]:
        return {self.header: self.key}


def from_config(config: ClientConfig) -> Any:
    """
    Build an auth client from ``config.auth_method``.

    Returns None when no auth method is configured.
    """
    auth_method = config.auth_method
    if not auth_method:
        return None

    if auth_method in ("jwt", "bearer"):
        return BearerTokenAuth(
            token=config.jwt_token,
            token_env=config.jwt_token_env,
            token_file=config.jwt_token_file,
        )
    if auth_method == "kerberos":
        return KerberosAuth(service_principal=config.kerberos_service_principal)
    if auth_method == "api_key":
        if not config.api_key:
            raise ValueError("api_key auth requested but no api_key configured")
        return ApiKeyAuth(key=config.api_key, header=config.api_key_header)

    raise ValueError(f"Unsupported auth method: {auth_method!r}")


def get_auth_headers(auth_client: Any) -> dict[str, str]:
    """Get authentication headers for the given auth client (empty for None)."""
    if auth_client is None:
        return _EMPTY_HEADERS
    return dict(auth_client.get_auth_headers())
