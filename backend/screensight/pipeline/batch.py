"""Chunked concurrent processing with per-item failure isolation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from screensight.errors import BatchFailed

logger = logging.getLogger(__name__)

In = TypeVar("In")
Out = TypeVar("Out")


@dataclass
class BatchItem(Generic[Out]):
    index: int
    value: Out | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult(Generic[Out]):
    total: int = 0
    successful: int = 0
    failed: int = 0
    results: list[BatchItem[Out]] = field(default_factory=list)


async def batch_import(
    items: Sequence[In],
    worker: Callable[[In], Awaitable[Out]],
    batch_size: int = 5,
) -> BatchResult[Out]:
    """Run ``worker`` over ``items``, ``batch_size`` at a time.

    Items within a chunk run concurrently and fail independently; chunk k
    finishes before chunk k+1 starts. Raises BatchFailed only when the input
    is non-empty and every item failed.
    """
    batch_size = max(1, batch_size)
    result: BatchResult[Out] = BatchResult(total=len(items))

    for start in range(0, len(items), batch_size):
        chunk = items[start:start + batch_size]
        outcomes = await asyncio.gather(*(worker(item) for item in chunk), return_exceptions=True)
        for offset, outcome in enumerate(outcomes):
            index = start + offset
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                logger.warning("Batch item %d failed: %s", index, outcome)
                result.results.append(BatchItem(index=index, error=outcome))
                result.failed += 1
            else:
                result.results.append(BatchItem(index=index, value=outcome))
                result.successful += 1

    if result.total and not result.successful:
        raise BatchFailed(
            f"All {result.total} batch items failed",
            [item.error for item in result.results if item.error is not None],
        )
    return result
