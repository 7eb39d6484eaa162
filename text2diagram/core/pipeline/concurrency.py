"""
All-or-nothing concurrent join.

Dependencies: asyncio
System role: Parallel extraction of independent flows
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

logger = logging.getLogger(__name__)


async def gather_all_or_nothing(*awaitables: Awaitable[Any]) -> list[Any]:
    """
    Await all awaitables concurrently; the first failure cancels the rest.

    Results keep the argument order regardless of completion order.

    Raises:
        BaseException: The first exception raised by any awaitable
    """
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.debug(f"{__name__}:gather_all_or_nothing - cancelled {len(pending)} sibling tasks")
            await asyncio.gather(*pending, return_exceptions=True)
        raise
