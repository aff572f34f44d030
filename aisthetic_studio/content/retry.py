# aisthetic_studio/content/retry.py
"""Retry logic for content service calls with exponential backoff."""

import logging

import httpx
from google.genai import errors as genai_errors
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = {408, 429, 500, 502, 503, 504}


def is_retryable(exception: BaseException) -> bool:
    """
    Returns True if the exception should be retried.

    Retryable conditions:
    - Transport failures (connection reset, read timeout)
    - APIError with status in (408, 429, 500, 502, 503, 504)
    """
    if isinstance(exception, (httpx.TransportError, ConnectionError)):
        return True

    if isinstance(exception, genai_errors.APIError):
        return exception.code in RETRYABLE_STATUSES

    return False


def content_retry(max_attempts: int = 3, min_wait: float = 2.0, max_wait: float = 30.0) -> AsyncRetrying:
    """
    Build a tenacity retrier for one service call.

    Usage:
        async for attempt in content_retry(3):
            with attempt:
                response = await call()
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
