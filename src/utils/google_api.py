"""Retry helper for Tag Manager API requests."""

from __future__ import annotations

import random
import time
from typing import Callable, TypeVar

from googleapiclient.errors import HttpError

T = TypeVar("T")

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def is_retryable_google_api_error(error: BaseException) -> bool:
    """Return True for rate limiting, server errors and dropped connections."""
    if isinstance(error, HttpError):
        status = getattr(getattr(error, "resp", None), "status", None)
        return isinstance(status, int) and status in _RETRYABLE_STATUS_CODES
    return isinstance(error, (TimeoutError, ConnectionError))


def execute_with_retry(
    fn: Callable[[], T],
    *,
    retries: int = 4,
    base_delay_s: float = 0.5,
    max_delay_s: float = 8.0,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Execute `fn()` with exponential backoff for transient API errors.

    Args:
        fn: Callable that performs a single API request and returns the decoded payload.
        retries: Number of retries after the initial attempt.
        base_delay_s: Base delay in seconds.
        max_delay_s: Max delay in seconds.
        sleep: Sleep function (overridable in tests).

    Returns:
        The return value of `fn()`.

    Raises:
        The last exception if all retries fail or the error is non-retryable.
    """
    attempt = 0
    while True:
        try:
            return fn()
        except Exception as exc:
            if attempt >= retries or not is_retryable_google_api_error(exc):
                raise
            delay_s = min(max_delay_s, base_delay_s * (2**attempt))
            delay_s *= 0.5 + random.random()  # jitter in [0.5x, 1.5x)
            sleep(delay_s)
            attempt += 1
