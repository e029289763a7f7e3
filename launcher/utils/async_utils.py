import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

# Shared thread pool for blocking searcher / executor work
_executor = ThreadPoolExecutor(
    max_workers=8,
    thread_name_prefix="launcher_worker"
)

T = TypeVar('T')


async def run_in_executor(func: Callable[..., T], *args, **kwargs) -> T:
    """
    Run a blocking/synchronous function in the shared thread pool.

    Usage:
        result = await run_in_executor(blocking_function, arg1, arg2, key=value)
    """
    loop = asyncio.get_running_loop()

    if kwargs:
        return await loop.run_in_executor(_executor, lambda: func(*args, **kwargs))
    return await loop.run_in_executor(_executor, func, *args)


def cleanup_executor():
    """
    Shut down the thread pool.
    Call this when shutting down the application.
    """
    logger.info("Shutting down worker pool...")
    _executor.shutdown(wait=False, cancel_futures=True)
    logger.info("Worker pool shutdown complete")
