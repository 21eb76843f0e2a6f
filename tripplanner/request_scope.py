"""Ties upstream work to the lifetime of the inbound HTTP request."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import Request

from tripplanner.errors import ClientDisconnected, UpstreamTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

POLL_INTERVAL_SECONDS = 0.5


async def run_bound_to_request(
    request: Request,
    work: Awaitable[T],
    *,
    timeout: float,
    poll_interval: float = POLL_INTERVAL_SECONDS,
) -> T:
    """Await ``work``, cancelling it if the client disconnects or ``timeout`` passes."""
    task = asyncio.ensure_future(work)
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    try:
        while True:
            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.warning(f"{request.method} {request.url.path} exceeded {timeout:.0f}s, cancelling")
                raise UpstreamTimeoutError()
            done, _ = await asyncio.wait({task}, timeout=min(poll_interval, remaining))
            if task in done:
                return task.result()
            if await request.is_disconnected():
                logger.info(f"Client left {request.method} {request.url.path}, cancelling upstream call")
                raise ClientDisconnected()
    finally:
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
