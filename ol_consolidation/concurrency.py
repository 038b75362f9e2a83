# =============================================================================
# Bounded Fan-Out
# =============================================================================
# Runs awaitables as tasks with a semaphore capping how many are in flight.
# The first failure cancels the rest before it reaches the caller.
# =============================================================================

import asyncio
import inspect
from typing import Awaitable, Iterable, TypeVar

__all__ = ["gather_bounded"]

T = TypeVar("T")


def _close_unstarted(aws: list) -> None:
    for aw in aws:
        if inspect.iscoroutine(aw):
            aw.close()


async def gather_bounded(aws: Iterable[Awaitable[T]], limit: int) -> list[T]:
    """
    Await all ``aws`` concurrently with at most ``limit`` running at once.

    Results are returned in the order of ``aws``. When any awaitable raises,
    the others are cancelled and awaited before the first exception
    propagates, so no work outlives the call.

    Args:
        aws: Awaitables to run (typically coroutine objects, not yet started)
        limit: Maximum number of awaitables in flight

    Returns:
        List of results, one per awaitable

    Raises:
        ValueError: If limit is less than 1
    """
    aws = list(aws)
    if limit < 1:
        _close_unstarted(aws)
        raise ValueError(f"Concurrency limit must be at least 1, got {limit}")
    if not aws:
        return []

    semaphore = asyncio.Semaphore(limit)

    async def _run(aw: Awaitable[T]) -> T:
        async with semaphore:
            return await aw

    tasks = [asyncio.ensure_future(_run(aw)) for aw in aws]
    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)
        # Tasks cancelled while queued on the semaphore never started theirs
        _close_unstarted(aws)

    failures = [
        task.exception()
        for task in tasks
        if not task.cancelled() and task.exception() is not None
    ]
    if failures:
        raise failures[0]
    return [task.result() for task in tasks]
