"""Message type taxonomy and request/response classification.

The numeric values are part of the wire contract: they are what the tuple
codec writes into the type slot, so existing members must never be renumbered.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class MessageType(IntEnum):
    """Closed set of message kinds exchanged by the RPC layer."""

    # dist.rpc on builtin operators
    SCRIPT_CALL = 0
    SCRIPT_RET = 1
    # dist.rpc on Python UDFs
    PYTHON_CALL = 2
    PYTHON_RET = 3
    # dist.remote on builtin operators and Python UDFs
    SCRIPT_REMOTE_CALL = 4
    PYTHON_REMOTE_CALL = 5
    REMOTE_RET = 6
    # Remote-reference internal messages
    SCRIPT_RREF_FETCH_CALL = 7
    PYTHON_RREF_FETCH_CALL = 8
    SCRIPT_RREF_FETCH_RET = 9
    PYTHON_RREF_FETCH_RET = 10
    RREF_USER_DELETE = 11
    RREF_FORK_REQUEST = 12
    RREF_CHILD_ACCEPT = 13
    RREF_ACK = 14
    # Forward pass messages carrying autograd metadata
    FORWARD_AUTOGRAD_REQ = 15
    FORWARD_AUTOGRAD_RESP = 16
    # Gradient propagation on the backward pass
    BACKWARD_AUTOGRAD_REQ = 17
    BACKWARD_AUTOGRAD_RESP = 18
    # Autograd context cleanup
    CLEANUP_AUTOGRAD_CONTEXT_REQ = 19
    CLEANUP_AUTOGRAD_CONTEXT_RESP = 20
    # Requests run with profiling enabled
    RUN_WITH_PROFILING_REQ = 21
    RUN_WITH_PROFILING_RESP = 22
    # Callee failure, carried as a normal response
    EXCEPTION = 55
    # Placeholder held by a default-constructed message
    UNKNOWN = 60


# Keep these two sets together: a new member must land in exactly one of them
# unless it is a placeholder like UNKNOWN.
REQUEST_TYPES: Final[frozenset[MessageType]] = frozenset(
    {
        MessageType.SCRIPT_CALL,
        MessageType.PYTHON_CALL,
        MessageType.SCRIPT_REMOTE_CALL,
        MessageType.PYTHON_REMOTE_CALL,
        MessageType.SCRIPT_RREF_FETCH_CALL,
        MessageType.PYTHON_RREF_FETCH_CALL,
        MessageType.RREF_USER_DELETE,
        MessageType.RREF_CHILD_ACCEPT,
        MessageType.RREF_FORK_REQUEST,
        MessageType.FORWARD_AUTOGRAD_REQ,
        MessageType.BACKWARD_AUTOGRAD_REQ,
        MessageType.CLEANUP_AUTOGRAD_CONTEXT_REQ,
        MessageType.RUN_WITH_PROFILING_REQ,
    }
)

RESPONSE_TYPES: Final[frozenset[MessageType]] = frozenset(
    {
        MessageType.SCRIPT_RET,
        MessageType.PYTHON_RET,
        MessageType.REMOTE_RET,
        MessageType.SCRIPT_RREF_FETCH_RET,
        MessageType.PYTHON_RREF_FETCH_RET,
        MessageType.EXCEPTION,
        MessageType.RREF_ACK,
        MessageType.FORWARD_AUTOGRAD_RESP,
        MessageType.BACKWARD_AUTOGRAD_RESP,
        MessageType.CLEANUP_AUTOGRAD_CONTEXT_RESP,
        MessageType.RUN_WITH_PROFILING_RESP,
    }
)


def is_request_type(message_type: MessageType) -> bool:
    """Return ``True`` for kinds that initiate a call or action expecting a reply."""
    return message_type in REQUEST_TYPES


def is_response_type(message_type: MessageType) -> bool:
    """Return ``True`` for kinds that carry a completed outcome."""
    return message_type in RESPONSE_TYPES


def coerce_message_type(value: object) -> MessageType:
    """Return ``value`` as a ``MessageType`` member.

    Raises ``ValueError`` for ints outside the enumeration and ``TypeError`` for
    anything that is not an int (``bool`` included).
    """
    if isinstance(value, MessageType):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"message_type must be an int, got {type(value).__name__}")
    try:
        return MessageType(value)
    except ValueError:
        raise ValueError(f"unknown message type: {value}") from None
