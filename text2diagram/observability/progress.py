"""
Progress notification side channel.

Pipelines report stage strings ("Identifying entities...") through an
explicitly passed sink instead of ambient per-request state. Delivery is
fire-and-forget: a failing sink is logged and never affects generation.

Dependencies: asyncio, logging
System role: Stage reporting for caller UIs
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

ProgressSink = Callable[[str], Awaitable[None] | None]


class ProgressReporter:
    """Wraps an optional sink and shields the pipeline from its failures."""

    def __init__(self, sink: ProgressSink | None = None, enabled: bool = True) -> None:
        self._sink = sink
        self._enabled = enabled

    @property
    def active(self) -> bool:
        return self._enabled and self._sink is not None

    async def report(self, message: str) -> None:
        """
        Deliver a stage message to the sink.

        Args:
            message: Human-readable stage description
        """
        if not self.active:
            return
        try:
            result = self._sink(message)
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(
                f"{__name__}:report - Progress sink failed, ignoring - "
                f"{type(e).__name__}: {e}"
            )


class QueueProgressSink:
    """Progress sink that buffers messages in an asyncio.Queue for a consumer."""

    def __init__(self, maxsize: int = 0) -> None:
        self.queue: asyncio.Queue[str] = asyncio.Queue(maxsize=maxsize)

    def __call__(self, message: str) -> None:
        try:
            self.queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.debug(f"{__name__}:QueueProgressSink - Queue full, dropping '{message}'")

    def drain(self) -> list[str]:
        """Return and remove every buffered message."""
        messages = []
        while not self.queue.empty():
            messages.append(self.queue.get_nowait())
        return messages
