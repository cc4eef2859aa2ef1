"""Bounded-concurrency batch runner for upstream fetches."""

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class BatchResult(Generic[T, R]):
    """Outcome of one work item: the produced value, or why it failed."""

    item: T
    success: bool
    value: R | None = None
    error: str | None = None
    status: int | None = None  # upstream HTTP status, when the failure had one


async def run_bounded(
    items: Iterable[T],
    operation: Callable[[T], Awaitable[R]],
    concurrency: int,
    on_progress: Callable[[int, int], Any] | None = None,
    label: Callable[[T], str] = repr,
) -> list[BatchResult[T, R]]:
    """
    Run an async operation over every item with at most `concurrency` in flight.

    Exactly min(concurrency, len(items)) workers pull from a shared queue until
    it is empty. A failing item is recorded and never aborts the others, so
    every input yields exactly one result. Results come back in completion
    order.

    Args:
        items: Work items, processed in queue order
        operation: Coroutine function called once per item
        concurrency: Maximum operations in flight (clamped to [1, len(items)])
        on_progress: Called with (done, total) after each item completes; never
            awaited, and a callback that raises is logged and ignored
        label: Formats an item for log messages

    Returns:
        One BatchResult per input item
    """
    queue: deque[T] = deque(items)
    total = len(queue)
    if total == 0:
        return []

    workers = max(1, min(concurrency, total))
    done = 0

    async def worker() -> list[BatchResult[T, R]]:
        nonlocal done
        results: list[BatchResult[T, R]] = []
        while queue:
            item = queue.popleft()
            try:
                value = await operation(item)
            except Exception as e:
                logger.warning(f"Batch item {label(item)} failed: {e}")
                results.append(
                    BatchResult(
                        item=item,
                        success=False,
                        error=str(e) or type(e).__name__,
                        status=getattr(e, "status_code", None),
                    )
                )
            else:
                results.append(BatchResult(item=item, success=True, value=value))

            done += 1
            if on_progress is not None:
                try:
                    on_progress(done, total)
                except Exception as e:
                    logger.warning(f"Progress callback failed at {done}/{total}: {e}")
        return results

    per_worker = await asyncio.gather(*(worker() for _ in range(workers)))
    return [result for results in per_worker for result in results]
