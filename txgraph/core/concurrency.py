"""
Bounded-concurrency map for asyncio.

One helper for every fan-out in the pipeline (page fetch, transaction
resolution, parent status lookup): at most `concurrency` calls in flight,
output in input order, first failure propagates and cancels the rest.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def bounded_map(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    concurrency: int,
) -> list[R]:
    """
    Apply async `func` to every item with at most `concurrency` calls in flight.

    Each call waits for a semaphore slot before it starts, so pending work
    blocks until a running call finishes. Results are returned in the order
    of `items`, not in completion order. If any call raises, the remaining
    calls are cancelled and the exception propagates (no partial result).
    """
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")
    work = list(items)
    if not work:
        return []

    sem = asyncio.Semaphore(concurrency)

    async def _run(item: T) -> R:
        async with sem:
            return await func(item)

    tasks = [asyncio.ensure_future(_run(item)) for item in work]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Let cancelled tasks unwind before the error leaves this scope
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
