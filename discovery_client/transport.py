"""HTTP execution of request descriptors."""

from __future__ import annotations

import logging
import re
from typing import Any, TYPE_CHECKING
from urllib.parse import quote

import httpx

from .auth import get_auth_headers
from .errors import AccessDeniedError, HttpError, NotFoundError, RequestError, UnknownMethodError
from .resilience import RetryConfig, retry_with_backoff

if TYPE_CHECKING:
    from .config import ClientConfig
    from .metadata import ApiMetadata, MethodMetadata
    from .requests import Request

logger = logging.getLogger(__name__)

_TEMPLATE_VAR = re.compile(r"\{(\+?)([^}]+)\}")


def base_url(api_meta: ApiMetadata) -> str:
    """Base URL of the API: ``base_url`` or ``root_url`` + ``service_path``."""
    if api_meta.base_url:
        return api_meta.base_url
    if api_meta.root_url:
        return _join(api_meta.root_url, api_meta.service_path or "")
    raise RequestError(f"No base URL declared for API {api_meta.name!r}")


def _join(base: str, path: str) -> str:
    if not path:
        return base
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def build_url(
    api_meta: ApiMetadata,
    method: MethodMetadata,
    params: dict[str, Any],
) -> tuple[str, dict[str, Any]]:
    """
    Expand the method's path template and split off the query params.

    ``{name}`` values are percent-encoded; ``{+name}`` values keep reserved
    characters such as ``/``. Params not consumed by the template and not
    None are returned as query params.

    Returns:
        (url, query_params)

    Raises:
        RequestError: If a path parameter is missing
    """
    used: set[str] = set()

    def _expand(match: re.Match) -> str:
        reserved, name = match.group(1), match.group(2)
        value = params.get(name)
        if value is None:
            raise RequestError(f"Missing required path parameter {name!r} for {method.id}")
        used.add(name)
        safe = "/:@!$&'()*+,;=" if reserved else ""
        return quote(str(value), safe=safe)

    path = _TEMPLATE_VAR.sub(_expand, method.path or "")
    query = {
        key: value for key, value in params.items()
        if key not in used and value is not None
    }
    return _join(base_url(api_meta), path), query


def _raise_for_status(response: httpx.Response, url: str) -> None:
    status = response.status_code
    if status < 400:
        return
    if status == 404:
        raise NotFoundError(f"Not found: {url}", status_code=status, body=response.text)
    if status == 403:
        raise AccessDeniedError(f"Access denied: {url}", status_code=status, body=response.text)
    raise HttpError(f"HTTP {status} from {url}", status_code=status, body=response.text)


def execute(request: Request, config: ClientConfig) -> Any:
    """
    Execute a request over HTTP.

    Args:
        request: Request descriptor to send
        config: Client configuration (timeout, retries, user agent)

    Returns:
        Decoded JSON body, or None for an empty body

    Raises:
        UnknownMethodError: The method id is not declared in the metadata
        NotFoundError, AccessDeniedError, HttpError: Error status from the service
        RequestError: Transport failure
    """
    method = request.method
    if method is None:
        raise UnknownMethodError(
            f"Method {request.method_name!r} is not declared by {request.api_meta.name!r}"
        )

    url, query = build_url(request.api_meta, method, request.params)
    http_method = (method.http_method or "GET").upper()

    headers = {"User-Agent": config.user_agent}
    headers.update(get_auth_headers(request.auth_client))

    def _do_request() -> httpx.Response:
        with httpx.Client(timeout=config.timeout) as client:
            response = client.request(
                http_method,
                url,
                headers=headers,
                params=query if query else None,
                json=request.resource,
            )
        _raise_for_status(response, url)
        return response

    logger.debug(f"{http_method} {url} ({method.id})")
    try:
        response = retry_with_backoff(_do_request, RetryConfig.from_client_config(config))
    except httpx.HTTPError as e:
        raise RequestError(f"Request to {url} failed: {e}") from e

    if not response.content:
        return None
    return response.json()
