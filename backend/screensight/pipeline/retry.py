"""Exponential backoff for retryable VisionErrors."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from screensight.errors import RateLimited, VisionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


def backoff_delay_ms(attempt: int, base_delay_ms: int) -> int:
    """base × 2^attempt, attempt counted from 0."""
    return base_delay_ms * (2 ** attempt)


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    attempts: int = 3,
    base_delay_ms: int = 1000,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Call ``fn`` up to ``attempts`` times.

    Non-retryable errors (and anything that is not a VisionError) propagate
    immediately. A RateLimited error waits at least its ``wait_ms``.
    """
    attempts = max(1, attempts)
    for attempt in range(attempts - 1):
        try:
            return await fn()
        except VisionError as e:
            if not e.retryable:
                raise
            delay_ms = backoff_delay_ms(attempt, base_delay_ms)
            if isinstance(e, RateLimited):
                delay_ms = max(delay_ms, e.wait_ms)
            logger.warning(
                "Attempt %d/%d failed (%s: %s); retrying in %dms",
                attempt + 1, attempts, e.kind, e, delay_ms,
            )
            await sleep(delay_ms / 1000)
    return await fn()
