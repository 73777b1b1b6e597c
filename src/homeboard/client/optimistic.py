"""Optimistic update helper shared by every client collection."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

__all__ = ["perform_optimistic_update"]

T = TypeVar("T")


async def perform_optimistic_update(
    request: Callable[[], Awaitable[T]],
    apply: Callable[[], None],
    rollback: Callable[[], None],
) -> T:
    """Apply a change locally, then confirm it with the server.

    Args:
        request: Zero-argument coroutine function performing the API call.
        apply: Synchronously writes the expected change into the cache.
        rollback: Synchronously restores the cache if the request fails.

    Returns:
        Whatever *request* returns. Reconciling the cache with it is up to
        the caller.

    ``apply`` always runs before anything is awaited. On failure
    ``rollback`` runs and the original exception propagates unchanged; there
    are no retries.
    """
    apply()
    try:
        return await request()
    except (Exception, asyncio.CancelledError):
        rollback()
        raise
