"""
Generic retry decorator for async operations.

* delay before attempt n+1 = ``interval * (backoff ** (n - 1))``; backoff=1 keeps it constant
* only exception types passed in ``exceptions`` are retried; others propagate at once
* when every attempt fails, RetryExhaustedError is raised from the last error
"""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Awaitable, Callable, TypeVar

from txgraph.core.exceptions import RemoteFetchError, RetryExhaustedError
from txgraph.txgraph_logging import get_logger

logger = get_logger(__name__)

_T = TypeVar("_T")

DEFAULT_MAX_TRIES = 3
DEFAULT_INTERVAL = 0.5
DEFAULT_BACKOFF = 1.0


def retry(
    *,
    max_tries: int = DEFAULT_MAX_TRIES,
    interval: float = DEFAULT_INTERVAL,
    backoff: float = DEFAULT_BACKOFF,
    exceptions: tuple[type[BaseException], ...] = (RemoteFetchError,),
) -> Callable[[Callable[..., Awaitable[_T]]], Callable[..., Awaitable[_T]]]:
    """
    Parameters
    ----------
    max_tries : int
        Total number of attempts, including the first. Default 3.
    interval : float
        Seconds to wait after the first failed attempt.
    backoff : float
        Multiplier applied to the wait after each further failure.
    exceptions :
        Exception types that trigger another attempt.
    """
    if max_tries < 1:
        raise ValueError("max_tries must be >= 1")
    if interval < 0:
        raise ValueError("interval must be >= 0")

    def decorator(fn: Callable[..., Awaitable[_T]]) -> Callable[..., Awaitable[_T]]:
        name = getattr(fn, "__qualname__", repr(fn))

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> _T:
            delay = interval
            last_error: BaseException | None = None
            for attempt in range(1, max_tries + 1):
                try:
                    return await fn(*args, **kwargs)
                except exceptions as err:
                    last_error = err
                    logger.warning(
                        "retry_attempt_failed",
                        operation=name,
                        attempt=attempt,
                        max_tries=max_tries,
                        error=str(err),
                    )
                    if attempt < max_tries:
                        await asyncio.sleep(delay)
                        delay *= backoff
            logger.error("retry_exhausted", operation=name, attempts=max_tries, error=str(last_error))
            raise RetryExhaustedError(
                f"{name} failed after {max_tries} attempts: {last_error}",
                attempts=max_tries,
                last_error=last_error,
            ) from last_error

        return wrapper

    return decorator


async def with_retry(
    op: Callable[..., Awaitable[_T]],
    *args: Any,
    max_tries: int = DEFAULT_MAX_TRIES,
    interval: float = DEFAULT_INTERVAL,
    backoff: float = DEFAULT_BACKOFF,
    exceptions: tuple[type[BaseException], ...] = (RemoteFetchError,),
    **kwargs: Any,
) -> _T:
    """Call ``op(*args, **kwargs)`` under the retry policy (call-site form of retry())."""
    wrapped = retry(max_tries=max_tries, interval=interval, backoff=backoff, exceptions=exceptions)(op)
    return await wrapped(*args, **kwargs)
