"""Typed errors raised while building or decoding RPC messages.

Decode failures are internal-consistency violations: they mean the wire
tuple is corrupted or was produced by a mismatched peer. They propagate to the
caller unchanged. A callee failure is not a decode failure; it arrives as an
ordinary ``EXCEPTION`` message and is surfaced by
``raise_for_exception_response`` as ``RemoteCallError``.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import codes


@dataclass(frozen=True)
class RpcMessageError(Exception):
    """Base error type for RPC message failures."""

    message: str
    code: str = ""

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(frozen=True)
class MessageDecodeError(RpcMessageError):
    """Tagged tuple could not be converted back into a message."""


@dataclass(frozen=True)
class MessageStructureError(MessageDecodeError):
    """Input is not tuple-shaped or has the wrong number of slots."""

    code: str = codes.MALFORMED_MESSAGE_TUPLE


@dataclass(frozen=True)
class MessageSlotTypeError(MessageDecodeError):
    """One tuple slot holds the wrong value variant for its position."""

    code: str = codes.INVALID_SLOT_TYPE
    slot: str = ""
    expected: str = ""
    actual: str = ""


@dataclass(frozen=True)
class RemoteCallError(RpcMessageError):
    """Remote callee failed; its description arrived as an exception message."""

    code: str = codes.REMOTE_EXCEPTION
    message_id: int = -1
