"""Configurable retry policies with tenacity.

This module provides:
- Retry decorator factory using tenacity
- Exponential backoff with jitter
- The exception types treated as transient
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from depmeta_repository.config import RetryConfig
from depmeta_repository.observability import log_retry_attempt

P = ParamSpec("P")
R = TypeVar("R")


class RetryableStatusError(Exception):
    """A repository answered with a status worth retrying (429 or 5xx)."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url


# Default exceptions that trigger retry
DEFAULT_RETRY_EXCEPTIONS: tuple[type[Exception], ...] = (
    RetryableStatusError,
    httpx.TransportError,
    ConnectionError,
    TimeoutError,
)


def create_retry_decorator(
    config: RetryConfig,
    *,
    retry_exceptions: tuple[type[Exception], ...] | None = None,
    operation_name: str | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Create a retry decorator with the specified configuration.

    The last exception is re-raised unchanged once attempts are exhausted.

    Args:
        config: RetryConfig with retry policy settings.
        retry_exceptions: Exception types that trigger retry.
            Defaults to transport-related exceptions.
        operation_name: Name for logging purposes.

    Returns:
        Decorator function that adds retry behavior.

    Example:
        >>> config = RetryConfig(max_attempts=3)
        >>> @create_retry_decorator(config, operation_name="resolve")
        ... def get(path: str) -> httpx.Response:
        ...     return client.get(path)
    """
    exceptions = retry_exceptions or DEFAULT_RETRY_EXCEPTIONS

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        op_name = operation_name or func.__name__

        def before_sleep(state: RetryCallState) -> None:
            exc = state.outcome.exception() if state.outcome else None
            log_retry_attempt(
                operation=op_name,
                attempt=state.attempt_number,
                max_attempts=config.max_attempts,
                error=str(exc),
            )

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            retrying = Retrying(
                retry=retry_if_exception_type(exceptions),
                stop=stop_after_attempt(config.max_attempts),
                wait=wait_exponential_jitter(
                    initial=config.initial_wait_seconds,
                    max=config.max_wait_seconds,
                    jitter=config.jitter_seconds,
                ),
                before_sleep=before_sleep,
                reraise=True,
            )
            return retrying(func, *args, **kwargs)

        return wrapper

    return decorator
