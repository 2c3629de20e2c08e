"""Public error API for RPC messages."""

from . import codes
from .normalize import exception_to_text
from .types import (
    MessageDecodeError,
    MessageSlotTypeError,
    MessageStructureError,
    RemoteCallError,
    RpcMessageError,
)

__all__ = [
    "MessageDecodeError",
    "MessageSlotTypeError",
    "MessageStructureError",
    "RemoteCallError",
    "RpcMessageError",
    "codes",
    "exception_to_text",
]
