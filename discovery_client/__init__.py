"""
Discovery Client Library

Builds API clients from discovery documents: every method the document
declares becomes a request builder reachable by its dotted id.

Usage:
    from discovery_client import ApiMetadata, BearerTokenAuth, build

    meta = ApiMetadata.from_file("calendar-v3.json")
    client = build(meta).with_auth_client(BearerTokenAuth(token="..."))

    # calendar.events.list -> client.events.list
    request = client.events.list({"calendarId": "primary"})
    events = request.execute()

    # Same request, built directly by method id
    request = client.new_request("calendar.events.list", {"calendarId": "primary"})
"""

from .auth import ApiKeyAuth, BearerTokenAuth, KerberosAuth
from .client import Client, build
from .config import ClientConfig
from .errors import (
    AccessDeniedError,
    DiscoveryClientError,
    HttpError,
    NamespaceConflictError,
    NotFoundError,
    RequestError,
    RetryExhausted,
    UnknownMethodError,
)
from .helpers import MethodHelper
from .metadata import ApiMetadata, MethodMetadata
from .namespace import Namespace
from .reflection import ClientReflector, NamespaceNode
from .requests import Request

__all__ = [
    # Core classes
    "Client",
    "build",
    "Request",
    "MethodHelper",
    "Namespace",
    # Metadata
    "ApiMetadata",
    "MethodMetadata",
    # Auth
    "ApiKeyAuth",
    "BearerTokenAuth",
    "KerberosAuth",
    # Config
    "ClientConfig",
    # Introspection
    "ClientReflector",
    "NamespaceNode",
    # Exceptions
    "DiscoveryClientError",
    "NamespaceConflictError",
    "RequestError",
    "RetryExhausted",
    "UnknownMethodError",
    "HttpError",
    "NotFoundError",
    "AccessDeniedError",
]

__version__ = "0.1.0"
