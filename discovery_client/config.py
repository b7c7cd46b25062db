"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Config file search paths (in order of precedence, last wins)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".discovery" / "client.yaml",  # User-level defaults
    Path(".discovery.yaml"),  # Project-level overrides
]


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


@dataclass
class ClientConfig:
    """
    Configuration for discovery clients and request execution.

    Precedence (lowest to highest):
    1. Defaults
    2. Environment variables (DISCOVERY_*)
    3. ~/.discovery/client.yaml, then .discovery.yaml (via load())
    4. Constructor arguments
    """
    # Request timeout (seconds)
    timeout: float = field(
        default_factory=lambda: float(os.environ.get("DISCOVERY_TIMEOUT", "30"))
    )

    user_agent: str = field(
        default_factory=lambda: os.environ.get("DISCOVERY_USER_AGENT", "discovery-client")
    )

    # Raise NamespaceConflictError instead of last-wins on colliding method ids
    strict_namespace: bool = field(
        default_factory=lambda: _env_flag("DISCOVERY_STRICT_NAMESPACE", "false")
    )

    # Authentication method: "jwt", "bearer", "kerberos", "api_key" or None
    auth_method: str | None = field(
        default_factory=lambda: os.environ.get("DISCOVERY_AUTH_METHOD")
    )

    # Kerberos settings
    kerberos_service_principal: str | None = field(
        default_factory=lambda: os.environ.get("DISCOVERY_SERVICE_PRINCIPAL")
    )

    # JWT settings
    jwt_token: str | None = None  # Direct token (not from env for security)
    jwt_token_env: str = field(
        default_factory=lambda: os.environ.get("DISCOVERY_JWT_ENV", "DISCOVERY_JWT")
    )
    jwt_token_file: str | None = field(
        default_factory=lambda: os.environ.get("DISCOVERY_JWT_FILE")
    )

    # API key settings
    api_key: str | None = field(
        default_factory=lambda: os.environ.get("DISCOVERY_API_KEY")
    )
    api_key_header: str = "X-API-Key"

    # Retry configuration for transient failures
    retry_max_attempts: int = field(
        default_factory=lambda: int(os.environ.get("DISCOVERY_RETRY_MAX_ATTEMPTS", "3"))
    )
    retry_backoff_factor: float = field(
        default_factory=lambda: float(os.environ.get("DISCOVERY_RETRY_BACKOFF_FACTOR", "0.5"))
    )
    retry_status_codes: tuple[int, ...] = field(
        default_factory=lambda: (429, 502, 503, 504)
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientConfig:
        """Create config from dictionary."""
        strict = data.get("strict_namespace")
        if strict is None:
            strict = _env_flag("DISCOVERY_STRICT_NAMESPACE", "false")
        elif isinstance(strict, str):
            strict = strict.lower() == "true"
        config = cls(
            timeout=float(data.get("timeout", os.environ.get("DISCOVERY_TIMEOUT", "30"))),
            user_agent=data.get("user_agent", os.environ.get("DISCOVERY_USER_AGENT", "discovery-client")),
            strict_namespace=bool(strict),
            auth_method=data.get("auth_method", os.environ.get("DISCOVERY_AUTH_METHOD")),
            kerberos_service_principal=data.get("kerberos_service_principal", os.environ.get("DISCOVERY_SERVICE_PRINCIPAL")),
            jwt_token=data.get("jwt_token"),
            jwt_token_env=data.get("jwt_token_env", os.environ.get("DISCOVERY_JWT_ENV", "DISCOVERY_JWT")),
            jwt_token_file=data.get("jwt_token_file", os.environ.get("DISCOVERY_JWT_FILE")),
            api_key=data.get("api_key", os.environ.get("DISCOVERY_API_KEY")),
            api_key_header=data.get("api_key_header", "X-API-Key"),
            retry_max_attempts=int(data.get("retry_max_attempts", os.environ.get("DISCOVERY_RETRY_MAX_ATTEMPTS", "3"))),
            retry_backoff_factor=float(data.get("retry_backoff_factor", os.environ.get("DISCOVERY_RETRY_BACKOFF_FACTOR", "0.5"))),
        )
        if "retry_status_codes" in data:
            config.retry_status_codes = tuple(int(c) for c in data["retry_status_codes"])
        return config

    @classmethod
    def from_yaml(cls, path: str | Path) -> ClientConfig:
        """Load config from YAML file."""
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def load(cls, config_file: str | Path | None = None) -> ClientConfig:
        """
        Load config with auto-discovery.

        Search order (last wins):
        1. ~/.discovery/client.yaml
        2. .discovery.yaml
        3. Explicit config_file argument
        """
        import yaml

        merged: dict[str, Any] = {}

        for path in CONFIG_SEARCH_PATHS:
            if path.exists():
                with open(path, "r") as f:
                    data = yaml.safe_load(f) or {}
                merged.update(data)

        if config_file:
            with open(config_file, "r") as f:
                data = yaml.safe_load(f) or {}
            merged.update(data)

        return cls.from_dict(merged)
