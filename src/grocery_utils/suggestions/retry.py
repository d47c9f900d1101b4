"""Retrying provider HTTP calls on transient failures."""

import logging
import time
from functools import wraps
from typing import Any, Callable

import requests

logger = logging.getLogger(__name__)

# Status codes worth another attempt: rate limiting and gateway hiccups
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)

TRANSIENT_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.ChunkedEncodingError,
    requests.exceptions.ReadTimeout,
    ConnectionResetError,
)


def is_transient(error: Exception) -> bool:
    """Check if a request error is worth retrying."""
    if isinstance(error, TRANSIENT_ERRORS):
        return True
    if isinstance(error, requests.exceptions.HTTPError):
        response = error.response
        return response is not None and response.status_code in RETRY_STATUS_CODES
    return False


def retry_on_transient_error(
    max_retries: int = 3, initial_delay: float = 1.0
) -> Callable:
    """Retry a provider request with exponential backoff.

    Connection resets, read timeouts and HTTP responses with a status in
    ``RETRY_STATUS_CODES`` are retried; any other error is raised at once.

    Args:
        max_retries: Maximum number of attempts
        initial_delay: Delay before the second attempt in seconds, doubled
            after every further failure

    Example:
        @retry_on_transient_error(max_retries=3, initial_delay=1.0)
        def post_completion(session, url, payload):
            return session.post(url, json=payload)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            for attempt in range(1, max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except (requests.exceptions.RequestException, ConnectionResetError) as e:
                    if not is_transient(e):
                        raise
                    if attempt == max_retries:
                        logger.error("Provider request failed after %d attempts: %s", attempt, e)
                        raise
                    logger.warning(
                        "Provider request failed (attempt %d/%d): %s. Retrying in %ss...",
                        attempt,
                        max_retries,
                        e,
                        delay,
                    )
                    time.sleep(delay)
                    delay *= 2

        return wrapper

    return decorator
