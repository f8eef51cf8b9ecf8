"""
Retry utilities for the HTTP transport.

Provides exponential backoff with jitter for transient network failures.
Only the transport retries; the dispatcher and the population engine never
do.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field
from typing import (
    Awaitable,
    Callable,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from cfx_rpc.utils.logging import get_logger

T = TypeVar("T")

_logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryConfig:
    """
    Configuration for retry behavior.

    Example:
        ```python
        config = RetryConfig(
            max_attempts=5,
            base_delay_ms=200,
            jitter=True,
            retryable_errors=(httpx.TransportError,),
        )
        ```
    """

    max_attempts: int = 3
    """Maximum number of attempts, the first one included."""

    base_delay_ms: int = 500
    """Base delay in milliseconds for exponential backoff."""

    max_delay_ms: int = 10000
    """Maximum delay in milliseconds (cap for exponential growth)."""

    jitter: bool = True
    """Whether to add random jitter to delays."""

    exponential_base: float = 2.0
    """Base for exponential backoff calculation."""

    retryable_errors: Tuple[Type[BaseException], ...] = field(
        default_factory=lambda: (Exception,)
    )
    """Tuple of exception types that should trigger a retry."""


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """
    Calculate delay with exponential backoff and optional jitter.

    Args:
        attempt: Zero-based attempt number (0 = first retry)
        config: Retry configuration

    Returns:
        Delay in seconds
    """
    delay_ms = config.base_delay_ms * (config.exponential_base ** attempt)
    delay_ms = min(delay_ms, config.max_delay_ms)

    if config.jitter:
        # Full jitter
        delay_ms = random.uniform(0, delay_ms)

    return delay_ms / 1000


async def retry_async(
    fn: Callable[[], Awaitable[T]],
    config: Optional[RetryConfig] = None,
) -> T:
    """
    Execute async function with retry logic.

    Args:
        fn: Async function to execute (no arguments)
        config: Retry configuration (uses defaults if None)

    Returns:
        Result of the function

    Raises:
        Last exception if all attempts fail, or immediately for
        exceptions outside ``config.retryable_errors``.
    """
    config = config or RetryConfig()
    attempts = max(1, config.max_attempts)

    for attempt in range(attempts):
        try:
            return await fn()
        except config.retryable_errors as e:
            if attempt >= attempts - 1:
                raise
            delay = calculate_delay(attempt, config)
            _logger.debug(
                "Retrying after transient failure",
                extra={"attempt": attempt + 1, "delay_s": round(delay, 3), "error": str(e)},
            )
            await asyncio.sleep(delay)

    raise RuntimeError("Retry exhausted without error")
