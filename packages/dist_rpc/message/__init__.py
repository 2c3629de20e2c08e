"""Public RPC message API: envelope, type taxonomy, and tuple codec."""

from .builders import create_exception_response, raise_for_exception_response
from .codec import MESSAGE_TUPLE_SIZE, MessageSlot, from_ivalue_tuple, to_ivalue_tuple
from .ivalue import INT64_MAX, INT64_MIN, IValue, IValueTag
from .message import UNSET_MESSAGE_ID, Message
from .types import (
    REQUEST_TYPES,
    RESPONSE_TYPES,
    MessageType,
    coerce_message_type,
    is_request_type,
    is_response_type,
)

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "IValue",
    "IValueTag",
    "MESSAGE_TUPLE_SIZE",
    "Message",
    "MessageSlot",
    "MessageType",
    "REQUEST_TYPES",
    "RESPONSE_TYPES",
    "UNSET_MESSAGE_ID",
    "coerce_message_type",
    "create_exception_response",
    "from_ivalue_tuple",
    "is_request_type",
    "is_response_type",
    "raise_for_exception_response",
    "to_ivalue_tuple",
]
