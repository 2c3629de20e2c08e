"""Block-scoped logging context for message handling.

Fields are held in a ``ContextVar`` so they follow sync and async call paths
alike. Context is only ever bound for the duration of a ``with`` block; nothing
in this package leaves fields behind after the block exits.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

from . import fields

_LOG_CONTEXT: ContextVar[dict[str, str]] = ContextVar("dist_rpc_log_context", default={})


def get_context() -> dict[str, str]:
    """Return a shallow copy of current logging context."""
    return dict(_LOG_CONTEXT.get())


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind stringified, non-``None`` values for the duration of a block."""
    current = _LOG_CONTEXT.get().copy()
    current.update({str(key): str(value) for key, value in values.items() if value is not None})
    token = _LOG_CONTEXT.set(current)
    try:
        yield
    finally:
        _LOG_CONTEXT.reset(token)


@contextmanager
def message_context(
    *,
    message_id: int | None = None,
    message_type: object = None,
    **values: object,
) -> Iterator[None]:
    """Bind message identity plus extra fields for the duration of a block.

    ``message_type`` is logged by member name (``PYTHON_CALL``), not by its
    wire integer.
    """
    type_name = getattr(message_type, "name", message_type)
    with log_context(
        {fields.MESSAGE_ID: message_id, fields.MESSAGE_TYPE: type_name, **values}
    ):
        yield
