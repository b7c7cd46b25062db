"""Retry with exponential backoff for request execution."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import TypeVar, Callable, Any, TYPE_CHECKING

import httpx

from .errors import RetryExhausted

if TYPE_CHECKING:
    from .config import ClientConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""
    max_retries: int = 2
    base_delay_seconds: float = 0.5
    max_delay_seconds: float = 30.0
    exponential_base: float = 2.0
    retryable_status_codes: frozenset[int] = frozenset({429, 502, 503, 504})

    @classmethod
    def from_client_config(cls, config: ClientConfig) -> RetryConfig:
        """Derive retry settings; ``retry_max_attempts`` counts the first try."""
        return cls(
            max_retries=max(config.retry_max_attempts - 1, 0),
            base_delay_seconds=config.retry_backoff_factor,
            retryable_status_codes=frozenset(config.retry_status_codes),
        )


def is_retryable(exc: Exception, config: RetryConfig) -> bool:
    """Transport failures and configured status codes are retryable."""
    if isinstance(exc, (httpx.TimeoutException, httpx.NetworkError)):
        return True
    status_code = getattr(exc, "status_code", None)
    if status_code is None and isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
    return status_code in config.retryable_status_codes


def retry_with_backoff(
    func: Callable[..., T],
    config: RetryConfig | None = None,
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Execute a function with exponential backoff retry.

    Non-retryable errors propagate immediately; a retryable error on the
    last attempt propagates unchanged.

    Args:
        func: Function to call
        config: Retry configuration
        *args, **kwargs: Arguments to pass to func

    Returns:
        Result of func

    Raises:
        RetryExhausted: If the loop ends without a result or an error
    """
    if config is None:
        config = RetryConfig()

    last_exception: Exception | None = None

    for attempt in range(config.max_retries + 1):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            last_exception = e
            if not is_retryable(e, config) or attempt == config.max_retries:
                raise

            delay = min(
                config.base_delay_seconds * (config.exponential_base ** attempt),
                config.max_delay_seconds,
            )
            # Jitter: 75%-125% of the computed delay
            delay *= (0.75 + random.random() * 0.5)

            logger.warning(
                f"Retry {attempt + 1}/{config.max_retries} after {delay:.1f}s: {e}"
            )
            time.sleep(delay)

    raise RetryExhausted(
        f"All {config.max_retries} retries exhausted",
        last_exception=last_exception,
    )
