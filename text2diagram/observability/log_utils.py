"""
Logging utilities for safe structured logging.

Raw model completions are long and span many lines; these helpers flatten
and truncate them so a single failed attempt stays on one log line.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Render a value as one bounded log line.

    Collections are summarized by size. Text has its whitespace runs
    collapsed before truncation.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Single-line representation
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    text = " ".join(str(value).split())
    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def _with_context(message: str, context: dict[str, Any]) -> str:
    if not context:
        return message
    pairs = ", ".join(f"{key}={safe_log_value(val)}" for key, val in context.items())
    return f"{message} | {pairs}"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message followed by key=value context pairs.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs, converted with safe_log_value
    """
    logger.log(level, _with_context(message, context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """Log a failure with its type, message, traceback and extra context."""
    context["error_type"] = type(exc).__name__
    context["error_msg"] = str(exc)
    logger.error(_with_context(message, context), exc_info=exc)
