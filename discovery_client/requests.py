"""Request descriptors produced by clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import ClientConfig
    from .metadata import ApiMetadata, MethodMetadata


@dataclass(eq=False)
class Request:
    """
    One pending call to an API method.

    A Request is self-contained: it keeps the API metadata, the method id,
    a snapshot of the params, the optional resource body, the auth
    client and the configuration of the client that built it. It holds no
    reference to the Client itself.

    The method id is not checked against the metadata here; an unknown id
    only fails when the request is executed.
    """
    api_meta: ApiMetadata
    method_name: str
    params: dict[str, Any] | None = None
    resource: Any = None
    auth_client: Any = field(default=None, init=False)
    config: ClientConfig | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.params = dict(self.params) if self.params else {}

    def with_auth_client(self, auth_client: Any) -> Request:
        """Attach an auth client. Returns itself."""
        self.auth_client = auth_client
        return self

    def with_config(self, config: ClientConfig | None) -> Request:
        """Attach the configuration used by execute(). Returns itself."""
        self.config = config
        return self

    @property
    def method(self) -> MethodMetadata | None:
        """Metadata of the target method, or None if the id is unknown."""
        return self.api_meta.find_method(self.method_name)

    def execute(self, config: ClientConfig | None = None) -> Any:
        """
        Send the request and return the decoded response body.

        Args:
            config: Overrides the attached configuration; env defaults if neither is set
        """
        from .config import ClientConfig
        from .transport import execute

        return execute(self, config or self.config or ClientConfig())

    def __repr__(self) -> str:
        return f"Request({self.method_name!r}, params={self.params!r})"
