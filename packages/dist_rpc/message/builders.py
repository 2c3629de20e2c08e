"""Constructors for exception messages and the matching receive-side check."""

from __future__ import annotations

from packages.dist_rpc.errors import RemoteCallError, exception_to_text
from packages.dist_rpc.logging import fields, get_logger, message_context

from .message import Message
from .types import MessageType

_LOGGER = get_logger(__name__)


def create_exception_response(error: str | BaseException, message_id: int) -> Message:
    """Build the ``EXCEPTION`` message reporting a failed call back to its caller.

    ``error`` is either the description itself or an exception whose text is
    used. The payload is that description encoded as UTF-8; no handles are
    attached.
    """
    description = error if isinstance(error, str) else exception_to_text(error)
    message = Message(
        bytearray(description.encode("utf-8")),
        [],
        MessageType.EXCEPTION,
        message_id,
    )
    with message_context(
        message_id=message.id,
        message_type=message.message_type,
        **{
            fields.EVENT: fields.EXCEPTION_RESPONSE_EVENT,
            fields.PAYLOAD_BYTES: len(message.payload),
            fields.HANDLE_COUNT: len(message.handles),
        },
    ):
        _LOGGER.debug("Exception response created")
    return message


def raise_for_exception_response(message: Message) -> None:
    """Raise ``RemoteCallError`` when ``message`` reports a remote failure."""
    if message.message_type is not MessageType.EXCEPTION:
        return
    description = bytes(message.payload).decode("utf-8", errors="replace")
    raise RemoteCallError(message=description, message_id=message.id)
