"""
Retry policy for secrets-sync network calls.

Rate-limit and abuse-detection responses surface as ``RateLimitedError``
carrying the platform's retry interval; ``call_with_retry`` wraps any
coroutine factory and retries it while the error is retryable.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from secrets_sync.exceptions import RateLimitedError, ServerError
from secrets_sync.logging import get_logger

T = TypeVar("T")

logger = get_logger("http")


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    respect_retry_after: bool = True
    retry_server_errors: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


def is_retryable(error: BaseException, config: RetryConfig) -> bool:
    """
    Decide whether an error is transient.

    Args:
        error: The exception raised by a network call
        config: Retry configuration

    Returns:
        True for rate-limit/abuse errors, and for server errors when enabled
    """
    if isinstance(error, RateLimitedError):
        return True
    if isinstance(error, ServerError):
        return config.retry_server_errors
    return False


def get_backoff_time(
    attempt: int, retry_after: float | None, config: RetryConfig
) -> float:
    """
    Calculate backoff time for a retry.

    Uses the platform-provided interval when present and respected,
    otherwise exponential backoff with jitter.

    Args:
        attempt: Current attempt number (0-indexed)
        retry_after: Interval suggested by the platform, in seconds
        config: Retry configuration

    Returns:
        Time to wait in seconds
    """
    if retry_after is not None and config.respect_retry_after:
        return max(0.0, float(retry_after))

    # Exponential backoff: backoff_factor ^ attempt
    base_wait = config.backoff_factor ** attempt

    jitter_range = base_wait * config.jitter
    jitter = random.uniform(-jitter_range, jitter_range)
    wait_time = base_wait + jitter

    return min(wait_time, config.max_backoff)


async def call_with_retry(
    call: Callable[[], Awaitable[T]],
    config: RetryConfig,
    description: str = "request",
) -> T:
    """
    Await ``call()`` and retry it on transient errors.

    Args:
        call: Zero-argument factory producing a fresh awaitable per attempt
        config: Retry configuration
        description: Human-readable label used in retry warnings

    Returns:
        Whatever the call returns

    Raises:
        SecretsSyncError: The last error, once it is not retryable or the
            retry budget is exhausted
    """
    attempt = 0
    while True:
        try:
            return await call()
        except (RateLimitedError, ServerError) as error:
            if not is_retryable(error, config):
                raise
            if attempt >= config.max_retries:
                logger.warning(f"Did not retry {description}: {error}")
                raise

            retry_after = error.retry_after if isinstance(error, RateLimitedError) else None
            wait_time = get_backoff_time(attempt, retry_after, config)
            logger.warning(
                f"Retrying {description} after {wait_time:.1f} seconds "
                f"(attempt {attempt + 1} of {config.max_retries}): {error.message}"
            )
            await asyncio.sleep(wait_time)
            attempt += 1
