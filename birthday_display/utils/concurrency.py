import asyncio
from typing import Any, Awaitable

# Default limit for parallel image downloads
DEFAULT_CONCURRENCY_LIMIT = 10


async def run_limited(semaphore: asyncio.Semaphore, coroutine: Awaitable[Any]) -> Any:
    """
    Await a coroutine while holding a slot of the given semaphore.

    Unlike asyncio.gather, every coroutine stays an independent task, so each
    result can be handed over as soon as it is ready and single tasks can be
    cancelled.

    Args:
        semaphore: Shared semaphore that bounds the number of running coroutines.
        coroutine: Coroutine to execute.

    Usage:
        semaphore = asyncio.Semaphore(DEFAULT_CONCURRENCY_LIMIT)
        task = asyncio.ensure_future(run_limited(semaphore, fetch(url)))
    """
    async with semaphore:
        return await coroutine
