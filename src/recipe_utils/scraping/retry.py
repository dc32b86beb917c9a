"""Retry decorator for transient HTTP failures."""

import logging
import time
from functools import wraps
from typing import Any, Callable

import requests

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def _is_retryable(error: Exception) -> bool:
    if isinstance(error, requests.exceptions.HTTPError):
        response = error.response
        return response is not None and response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(
        error,
        (
            requests.exceptions.ConnectionError,
            requests.exceptions.ChunkedEncodingError,
            requests.exceptions.Timeout,
            ConnectionResetError,
        ),
    )


def retry_on_transient_error(
    max_retries: int = 3, initial_delay: float = 1.0
) -> Callable:
    """Retry a call on connection errors, timeouts and 429/5xx responses.

    The delay doubles after every failed attempt. Other errors, including
    4xx responses, propagate immediately.

    Args:
        max_retries: Total number of attempts
        initial_delay: Delay before the second attempt in seconds

    Example:
        @retry_on_transient_error(max_retries=3, initial_delay=1.0)
        def fetch_page(url):
            response = requests.get(url)
            response.raise_for_status()
            return response
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            for attempt in range(1, max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not _is_retryable(e):
                        raise
                    if attempt == max_retries:
                        logger.error(f"Giving up after {max_retries} attempts: {e}")
                        raise
                    logger.warning(
                        f"Attempt {attempt}/{max_retries} failed: {e}. "
                        f"Retrying in {delay}s"
                    )
                    time.sleep(delay)
                    delay *= 2

        return wrapper

    return decorator
