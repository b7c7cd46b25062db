"""Client built from API metadata, with one request builder per method."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import ClientConfig
from .helpers import generate_helper
from .metadata import ApiMetadata
from .namespace import extend
from .requests import Request

logger = logging.getLogger(__name__)


class Client:
    """
    Client for one API surface described by a metadata document.

    Every method in the metadata gets a request builder installed at its
    dotted id minus the leading service segment:

        client = Client({
            "name": "calendar",
            "version": "v3",
            "methods": {
                "calendar.events.list": {"id": "calendar.events.list"},
                "calendar.events.insert": {"id": "calendar.events.insert"},
            },
        })
        req = client.events.list({"calendarId": "primary"})
        req = client.events.insert({"calendarId": "primary"}, {"summary": "Standup"})

        # Same request, built directly
        req = client.new_request("calendar.events.list", {"calendarId": "primary"})

    Builders are installed in metadata iteration order. When two ids
    resolve to the same path the later one wins and a warning is logged,
    unless ``config.strict_namespace`` is set, in which case construction
    raises NamespaceConflictError. Ids without a dot are not installed but
    stay usable through ``new_request``.

    Client state lives in underscore attributes, and ids with an
    underscore segment are never installed, so builders cannot replace it.
    Public accessors are not protected: an id such as ``svc.get_name``
    or ``svc.with_auth_client`` shadows that method on the instance (a
    warning is logged), and the accessor is then only reachable as
    ``Client.get_name(client)``.
    """

    def __init__(
        self,
        api_meta: ApiMetadata | Mapping[str, Any],
        config: ClientConfig | None = None,
    ):
        if not isinstance(api_meta, ApiMetadata):
            api_meta = ApiMetadata.from_dict(api_meta)
        self._api_meta = api_meta
        self._config = config if config is not None else ClientConfig()
        self._auth_client: Any = None
        self._register_helpers()

    def get_name(self) -> str:
        """Gets the API's name."""
        return self._api_meta.name

    def get_version(self) -> str:
        """Gets the API's version."""
        return self._api_meta.version

    def get_api_meta(self) -> ApiMetadata:
        return self._api_meta

    def get_config(self) -> ClientConfig:
        return self._config

    def get_auth_client(self) -> Any:
        return self._auth_client

    def with_auth_client(self, auth_client: Any) -> Client:
        """
        Set the auth client used by requests built from now on.

        Requests built earlier keep the auth client they were built with.

        Returns:
            The client itself, for chaining
        """
        self._auth_client = auth_client
        return self

    def new_request(
        self,
        method_name: str,
        params: dict[str, Any] | None = None,
        resource: Any = None,
    ) -> Request:
        """
        Construct a request to a method.

        ``method_name`` is not checked against the metadata, so ids the
        document does not declare are accepted here.

        Args:
            method_name: Full dotted method id
            params: Method parameters
            resource: Optional request body

        Returns:
            New Request carrying the current auth client and the client config
        """
        request = Request(self._api_meta, method_name, params, resource)
        return request.with_auth_client(self._auth_client).with_config(self._config)

    def _register_helpers(self) -> None:
        """Install a request builder for every declared method."""
        strict = self._config.strict_namespace
        for method_meta in self._api_meta.methods.values():
            extend(self, method_meta.id, generate_helper(self, method_meta), strict=strict)
        logger.debug(
            f"Registered {len(self._api_meta.methods)} methods for "
            f"{self._api_meta.name} {self._api_meta.version}"
        )

    def __repr__(self) -> str:
        return f"Client({self._api_meta.name!r}, {self._api_meta.version!r})"


def build(
    api_meta: ApiMetadata | Mapping[str, Any],
    auth_client: Any = None,
    config: ClientConfig | None = None,
) -> Client:
    """
    Build a client, attaching an auth client.

    When ``auth_client`` is omitted one is derived from ``config.auth_method``
    (none if no method is configured).

    Usage:
        from discovery_client import build
        client = build(ApiMetadata.from_file("calendar.json"))
        events = client.events.list({"calendarId": "primary"}).execute()
    """
    from .auth import from_config

    config = config if config is not None else ClientConfig()
    if auth_client is None:
        auth_client = from_config(config)
    return Client(api_meta, config=config).with_auth_client(auth_client)
