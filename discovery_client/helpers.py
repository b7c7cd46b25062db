"""Per-method request builders installed into a client's namespace."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .client import Client
    from .metadata import MethodMetadata
    from .requests import Request


class MethodHelper:
    """
    Callable bound to one method of one client.

    Calling the helper is the same as calling
    ``client.new_request(method.id, params, resource)``. The helper holds
    no other state, so every call produces a fresh Request carrying the
    auth client that is current at call time.

    Helpers also accept attributes, which lets a method id like
    ``svc.files.get`` coexist with ``svc.files.get.media``. Its own state
    lives in underscore attributes to stay clear of installed members.
    """

    def __init__(self, client: Client, method: MethodMetadata):
        self._client = client
        self._method = method
        if method.description:
            self.__doc__ = method.description

    def __call__(
        self,
        params: dict[str, Any] | None = None,
        resource: Any = None,
    ) -> Request:
        # Looked up on the class so an installed member named "new_request"
        # cannot intercept request construction.
        return type(self._client).new_request(
            self._client, self._method.id, params, resource
        )

    def __repr__(self) -> str:
        return f"MethodHelper({self._method.id!r})"


def generate_helper(client: Client, method_meta: MethodMetadata) -> MethodHelper:
    """Generate a request builder for one method."""
    return MethodHelper(client, method_meta)
