"""
Logger configuration.

One stdout handler for the whole process. Modules log through
``logging.getLogger(__name__)``; only the entry point calls
configure_logging, usually with ``Settings.log_level``.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries used by the Gemini chat model
NOISY_LOGGERS = ("httpx", "httpcore", "google", "grpc")


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Install the stdout handler on the root logger.

    Calling it again replaces the handler instead of stacking a second one.

    Args:
        level: Root log level, as a name ("DEBUG") or logging constant.
            Unknown names fall back to INFO.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.setLevel(_resolve_level(level))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
