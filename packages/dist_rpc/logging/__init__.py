"""Public logging API for RPC message handling.

This package wraps Python's ``logging`` module with stdout defaults and
block-scoped message context.
"""

from .config import ContextFilter, JsonFormatter, PlainFormatter, configure_logging, get_logger
from .context import get_context, log_context, message_context

__all__ = [
    "configure_logging",
    "ContextFilter",
    "get_context",
    "get_logger",
    "JsonFormatter",
    "log_context",
    "message_context",
    "PlainFormatter",
]
