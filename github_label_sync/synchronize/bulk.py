"""Runs a per-label coroutine over many labels at once."""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def run_concurrently(
    items: Iterable[T],
    operation: Callable[[T], Awaitable[R]],
    max_concurrency: int | None = None,
) -> list[R]:
    """Run ``operation`` for every item concurrently and wait for all of them.

    Results come back in input order, although the calls may complete in any
    order. With ``max_concurrency`` unset every call is started at once;
    otherwise at most that many are in flight at a time.
    """
    if max_concurrency is not None and max_concurrency < 1:
        raise ValueError("max_concurrency must be a positive integer")

    if max_concurrency is None:
        return list(await asyncio.gather(*(operation(item) for item in items)))

    semaphore = asyncio.Semaphore(max_concurrency)

    async def bounded(item: T) -> R:
        async with semaphore:
            return await operation(item)

    return list(await asyncio.gather(*(bounded(item) for item in items)))
