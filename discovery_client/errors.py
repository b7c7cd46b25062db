"""Exception hierarchy for the discovery client."""

from __future__ import annotations


class DiscoveryClientError(Exception):
    """Base exception for discovery client errors."""
    pass


class NamespaceConflictError(DiscoveryClientError):
    """Two method ids resolve to the same namespace path (strict mode only)."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class RequestError(DiscoveryClientError):
    """Failed to build or execute a request."""
    pass


class UnknownMethodError(RequestError):
    """Method id is not declared in the API metadata."""
    pass


class HttpError(RequestError):
    """The service answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NotFoundError(HttpError):
    """Resource not found (404)."""
    pass


class AccessDeniedError(HttpError):
    """Access denied by the service (403)."""
    pass


class RetryExhausted(DiscoveryClientError):
    """All retry attempts failed."""

    def __init__(self, message: str, last_exception: Exception | None = None):
        super().__init__(message)
        self.last_exception = last_exception
