"""Exponential backoff for generation calls."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0


def is_retryable(error: BaseException) -> bool:
    return bool(getattr(error, "retryable", False))


def backoff_delay(attempt: int, base_delay: float) -> float:
    """Delay before the attempt following ``attempt`` (1-indexed)."""
    return base_delay * 2 ** (attempt - 1)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run ``operation`` until it succeeds, retrying retryable errors.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        max_attempts: Total attempts including the first one
        base_delay: Seconds to wait after the first failure; doubles each time
        sleep: Awaitable sleep, replaceable in tests

    Returns:
        The operation's result

    Raises:
        Exception: The first non-retryable error, or the last error once
            attempts are exhausted
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as e:
            if not is_retryable(e) or attempt >= max_attempts:
                raise
            delay = backoff_delay(attempt, base_delay)
            logger.warning(
                "generation_attempt_failed",
                attempt=attempt,
                max_attempts=max_attempts,
                retry_in_seconds=delay,
                error_type=type(e).__name__,
                error=str(e),
            )
            await sleep(delay)
            attempt += 1
