"""Conversion between ``Message`` and its four-slot tagged tuple.

Slot order is fixed: payload, handles, type, id. The decoder validates every
slot before building anything and never attempts partial recovery.
"""

from __future__ import annotations

from enum import IntEnum

from packages.dist_rpc.errors import MessageSlotTypeError, MessageStructureError, codes
from packages.dist_rpc.logging import fields, get_logger, log_context

from .ivalue import IValue, IValueTag
from .message import Message
from .types import MessageType

_LOGGER = get_logger(__name__)


class MessageSlot(IntEnum):
    """Positions of message fields inside the tagged tuple."""

    PAYLOAD = 0
    HANDLES = 1
    TYPE = 2
    ID = 3


MESSAGE_TUPLE_SIZE = len(MessageSlot)


def to_ivalue_tuple(message: Message) -> IValue:
    """Encode ``message`` without mutating it."""
    return IValue.from_tuple(
        (
            IValue.from_string(bytes(message.payload)),
            IValue.from_handles(message.handles),
            IValue.from_int(int(message.message_type)),
            IValue.from_int(message.id),
        )
    )


def from_ivalue_tuple(value: object) -> Message:
    """Decode a tagged tuple produced by ``to_ivalue_tuple``.

    Raises ``MessageStructureError`` when ``value`` is not a four-slot tuple and
    ``MessageSlotTypeError`` when a slot holds the wrong variant or the type
    slot holds an int outside ``MessageType``.
    """
    if not isinstance(value, IValue) or not value.is_tuple():
        raise _structure_error(
            f"Expected message tuple to be of type tuple, got {_variant_name(value)}",
            code=codes.MALFORMED_MESSAGE_TUPLE,
        )
    values = value.to_tuple()
    if len(values) != MESSAGE_TUPLE_SIZE:
        raise _structure_error(
            f"Expected {MESSAGE_TUPLE_SIZE} elements in message tuple, got {len(values)}",
            code=codes.MESSAGE_TUPLE_ARITY,
        )

    payload_value = values[MessageSlot.PAYLOAD]
    if not payload_value.is_string():
        raise _slot_error(MessageSlot.PAYLOAD, IValueTag.STRING, payload_value)
    payload = bytearray(payload_value.to_string_ref())

    handles_value = values[MessageSlot.HANDLES]
    if not handles_value.is_list():
        raise _slot_error(MessageSlot.HANDLES, IValueTag.LIST, handles_value)
    try:
        handles = handles_value.to_handle_list()
    except TypeError:
        raise _slot_error(
            MessageSlot.HANDLES,
            IValueTag.LIST,
            handles_value,
            expected="list of handle",
        ) from None

    type_value = values[MessageSlot.TYPE]
    if not type_value.is_int():
        raise _slot_error(MessageSlot.TYPE, IValueTag.INT, type_value)
    raw_type = type_value.to_int()
    try:
        message_type = MessageType(raw_type)
    except ValueError:
        raise _slot_error(
            MessageSlot.TYPE,
            IValueTag.INT,
            type_value,
            expected="MessageType value",
            actual=str(raw_type),
            code=codes.UNKNOWN_MESSAGE_TYPE,
        ) from None

    id_value = values[MessageSlot.ID]
    if not id_value.is_int():
        raise _slot_error(MessageSlot.ID, IValueTag.INT, id_value)
    message_id = id_value.to_int()

    return Message(payload, handles, message_type, message_id)


def _structure_error(text: str, *, code: str) -> MessageStructureError:
    """Log and build a structural validation error."""
    with log_context(
        {fields.EVENT: fields.MESSAGE_DECODE_FAILURE_EVENT, fields.ERROR_CODE: code}
    ):
        _LOGGER.warning(text)
    return MessageStructureError(message=text, code=code)


def _slot_error(
    slot: MessageSlot,
    expected_tag: IValueTag,
    value: IValue,
    *,
    expected: str | None = None,
    actual: str | None = None,
    code: str = codes.INVALID_SLOT_TYPE,
) -> MessageSlotTypeError:
    """Log and build a slot type validation error."""
    slot_name = slot.name.lower()
    expected_name = expected or expected_tag.value
    actual_name = actual or _variant_name(value)
    text = f"Expected message {slot_name} to be {expected_name}, got {actual_name}"
    with log_context(
        {
            fields.EVENT: fields.MESSAGE_DECODE_FAILURE_EVENT,
            fields.ERROR_CODE: code,
            fields.SLOT: slot_name,
            fields.EXPECTED: expected_name,
            fields.ACTUAL: actual_name,
        }
    ):
        _LOGGER.warning(text)
    return MessageSlotTypeError(
        message=text,
        code=code,
        slot=slot_name,
        expected=expected_name,
        actual=actual_name,
    )


def _variant_name(value: object) -> str:
    """Describe the variant of ``value`` for diagnostics."""
    if isinstance(value, IValue):
        if value.is_list() and value.element_tag is not None:
            return f"list of {value.element_tag.value}"
        return value.tag.value
    return type(value).__name__
