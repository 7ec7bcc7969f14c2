"""
Deadline enforcement for storage round-trips issued by search operations.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from loguru import logger

from feedhub.core.exceptions import SearchTimeoutError

T = TypeVar("T")


async def run_with_deadline(operation: str, awaitable: Awaitable[T], timeout: float) -> T:
    """Await ``awaitable``, cancelling it once ``timeout`` seconds have passed."""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.warning(f"{operation} cancelled after {timeout:g}s")
        raise SearchTimeoutError(operation, timeout) from exc
