"""Tests for progress reporting and logging helpers."""

import asyncio
import logging

import pytest

from text2diagram.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from text2diagram.observability.logger import configure_logging
from text2diagram.observability.progress import ProgressReporter, QueueProgressSink


class TestProgressReporter:
    """Fire-and-forget delivery of stage messages."""

    @pytest.mark.asyncio
    async def test_sync_sink(self) -> None:
        received: list[str] = []
        reporter = ProgressReporter(received.append)

        await reporter.report("Identifying entities...")

        assert received == ["Identifying entities..."]

    @pytest.mark.asyncio
    async def test_async_sink(self) -> None:
        received: list[str] = []

        async def sink(message: str) -> None:
            received.append(message)

        await ProgressReporter(sink).report("Evaluating ER diagram...")

        assert received == ["Evaluating ER diagram..."]

    @pytest.mark.asyncio
    async def test_sink_failure_is_logged_not_raised(self, caplog) -> None:
        def sink(message: str) -> None:
            raise ConnectionError("socket closed")

        with caplog.at_level(logging.WARNING):
            await ProgressReporter(sink).report("x")

        assert "Progress sink failed" in caplog.text

    @pytest.mark.asyncio
    async def test_sink_cancellation_propagates(self) -> None:
        async def sink(message: str) -> None:
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await ProgressReporter(sink).report("x")

    @pytest.mark.asyncio
    async def test_disabled_reporter_is_silent(self) -> None:
        received: list[str] = []
        reporter = ProgressReporter(received.append, enabled=False)

        await reporter.report("x")

        assert received == []
        assert reporter.active is False
        assert ProgressReporter().active is False


class TestQueueProgressSink:
    """Queue-backed sink for streaming consumers."""

    @pytest.mark.asyncio
    async def test_messages_are_buffered_in_order(self) -> None:
        sink = QueueProgressSink()
        reporter = ProgressReporter(sink)

        await reporter.report("one")
        await reporter.report("two")

        assert sink.queue.qsize() == 2
        assert sink.drain() == ["one", "two"]
        assert sink.drain() == []

    @pytest.mark.asyncio
    async def test_full_queue_drops_messages(self) -> None:
        sink = QueueProgressSink(maxsize=1)

        sink("kept")
        sink("dropped")

        assert sink.drain() == ["kept"]


class TestLogUtils:
    """Safe structured logging helpers."""

    def test_safe_log_value(self) -> None:
        assert safe_log_value(None) == "None"
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value("x" * 20, max_length=5).startswith("xxxxx... (truncated, 20 total)")

    def test_safe_log_value_flattens_multiline_text(self) -> None:
        assert safe_log_value('```json\n{"a":\n  1}\n```') == '```json {"a": 1} ```'

    def test_log_with_context(self, caplog) -> None:
        logger = logging.getLogger("text2diagram.tests")

        with caplog.at_level(logging.INFO, logger="text2diagram.tests"):
            log_with_context(logger, logging.INFO, "done", diagram_type="ER", markup_len=42)

        assert "done | diagram_type=ER, markup_len=42" in caplog.text

    def test_log_exception_with_context(self, caplog) -> None:
        logger = logging.getLogger("text2diagram.tests")

        with caplog.at_level(logging.ERROR, logger="text2diagram.tests"):
            log_exception_with_context(logger, "failed", ValueError("bad"), step="entities")

        assert "failed | step=entities, error_type=ValueError, error_msg=bad" in caplog.text

    def test_configure_logging_accepts_level_names(self) -> None:
        root = logging.getLogger()
        original_level = root.level
        original_handlers = root.handlers[:]
        try:
            configure_logging("debug")
            assert root.level == logging.DEBUG
            configure_logging("not-a-level")
            assert root.level == logging.INFO
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
            for handler in original_handlers:
                root.addHandler(handler)
            root.setLevel(original_level)
