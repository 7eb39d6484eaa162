"""
Observability module.

Provides logging configuration, safe log helpers and progress reporting.
"""

from text2diagram.observability.logger import configure_logging
from text2diagram.observability.progress import (
    ProgressReporter,
    ProgressSink,
    QueueProgressSink,
)

__all__ = [
    "ProgressReporter",
    "ProgressSink",
    "QueueProgressSink",
    "configure_logging",
]
