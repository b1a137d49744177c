"""Exponential backoff with jitter for calls to the generative-AI backend.

The policy is split in two pieces so it can wrap any endpoint:

- `compute_delay(attempt)`: pure delay schedule, 2^attempt * base + jitter
- `call_with_retry(operation, policy)`: generic combinator driven by an
  `is_retryable(error)` predicate

Throttling (429), server faults (5xx) and transport failures share a single
attempt budget. Anything else propagates on the spot.
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from core.errors import RetriesExhaustedError, TransientNetworkError, TransientServerError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BASE_DELAY_MS = 1000
DEFAULT_JITTER_MS = 1000


def compute_delay(
    attempt: int,
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
    jitter_ms: int = DEFAULT_JITTER_MS,
    rng: Callable[[], float] = random.random,
) -> float:
    """Return the delay in seconds to wait after failed attempt number `attempt`.

    Delay (ms) = 2^attempt * base_delay_ms + uniform[0, jitter_ms).
    With the defaults this yields minimums of 1s, 2s, 4s, 8s, 16s.
    """
    delay_ms = (2**attempt) * base_delay_ms + rng() * jitter_ms
    return delay_ms / 1000


def is_retryable(error: BaseException) -> bool:
    """Only throttling/server faults and transport failures are worth retrying."""
    return isinstance(error, (TransientServerError, TransientNetworkError))


@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration shared by every operation of a client."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS
    jitter_ms: int = DEFAULT_JITTER_MS
    is_retryable: Callable[[BaseException], bool] = is_retryable
    sleep: Callable[[float], Awaitable[object]] = field(default=asyncio.sleep)
    rng: Callable[[], float] = field(default=random.random)

    def delay_for(self, attempt: int) -> float:
        return compute_delay(attempt, self.base_delay_ms, self.jitter_ms, self.rng)


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    description: str = "request",
) -> T:
    """Await `operation()` until it succeeds or the attempt budget runs out.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        policy: Retry configuration (defaults to 5 attempts, 1s base, 1s jitter)
        description: Human-readable name used in logs and the final error

    Returns:
        Whatever the first successful attempt returns

    Raises:
        RetriesExhaustedError: every attempt failed with a retryable error
        Exception: any non-retryable error, unchanged, on the attempt it occurred
    """
    policy = policy or RetryPolicy()
    last_error: Exception | None = None

    for attempt in range(policy.max_attempts):
        try:
            result = await operation()
            if attempt > 0:
                logger.info(f"{description} succeeded after {attempt} retries")
            return result
        except Exception as e:
            if not policy.is_retryable(e):
                raise
            last_error = e

        delay = policy.delay_for(attempt)
        logger.warning(
            f"{description} attempt {attempt + 1}/{policy.max_attempts} failed, "
            f"backing off {delay:.2f}s: {last_error}"
        )
        await policy.sleep(delay)

    logger.error(f"Max retries ({policy.max_attempts}) exceeded for {description}")
    raise RetriesExhaustedError(policy.max_attempts, last_error, description) from last_error


__all__ = [
    "RetryPolicy",
    "call_with_retry",
    "compute_delay",
    "is_retryable",
]
