"""
Fail-soft repository reads.

An upstream read that raises or times out is treated the same as one that
found nothing: the failure is logged and the caller gets an empty default.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def read_or_default(
    label: str,
    read: Awaitable[T],
    default_factory: Callable[[], T],
    timeout: Optional[float] = None,
) -> T:
    """
    Await a repository read; on error, timeout or None, return default_factory().

    timeout is in seconds; None waits indefinitely.
    """
    try:
        result = await asyncio.wait_for(read, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("[reads] READ_TIMEOUT read=%s timeout=%s", label, timeout)
        return default_factory()
    except Exception as e:
        logger.warning("[reads] READ_FAILED read=%s error=%r", label, e)
        return default_factory()
    if result is None:
        return default_factory()
    return result
