"""Stdout logging configuration for processes exchanging RPC messages.

JSON output groups message fields (id, type, sizes, decode slot) under one
``rpc`` object so log pipelines can index them without knowing every event.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, Mapping

from . import fields
from .context import get_context


class ContextFilter(logging.Filter):
    """Attach bound context, plus fixed process fields, to each record."""

    def __init__(self, static: Mapping[str, str] | None = None) -> None:
        super().__init__()
        self._static = dict(static or {})

    def filter(self, record: logging.LogRecord) -> bool:
        context = {**self._static, **get_context()}
        setattr(record, "context", context)
        for key, value in context.items():
            setattr(record, key, value)
        return True


class JsonFormatter(logging.Formatter):
    """Emit newline-delimited JSON with message fields under ``rpc``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            fields.TIMESTAMP: datetime.now(UTC).isoformat(),
            fields.LEVEL: record.levelname,
            fields.LOGGER: record.name,
            fields.MESSAGE: record.getMessage(),
        }

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            rpc = {key: context[key] for key in fields.MESSAGE_FIELDS if key in context}
            if rpc:
                payload[fields.RPC] = rpc
            payload.update(
                (key, value) for key, value in context.items() if key not in fields.MESSAGE_FIELDS
            )

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Human-readable formatter tagging lines with ``[TYPE#id]``."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if not isinstance(context, dict) or not context:
            return line

        remaining = dict(context)
        message_type = remaining.pop(fields.MESSAGE_TYPE, None)
        message_id = remaining.pop(fields.MESSAGE_ID, None)
        if message_type is not None or message_id is not None:
            line = f"{line} [{message_type or '?'}#{message_id or '?'}]"
        if remaining:
            line += " " + " ".join(f"{key}={value}" for key, value in sorted(remaining.items()))
        return line


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = True,
    service: str | None = None,
) -> None:
    """Install a single stdout handler on the root logger.

    Existing root handlers are replaced so repeated calls never duplicate
    emissions. ``service`` is stamped on every record without being bound into
    the shared context.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level.upper())
    handler.addFilter(ContextFilter({fields.SERVICE: service} if service else None))
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())
    root.addHandler(handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger using Python's standard logging hierarchy."""
    return logging.getLogger(name)
