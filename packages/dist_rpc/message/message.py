"""RPC message envelope: payload bytes, ordered handles, type and id."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from .ivalue import INT64_MAX, INT64_MIN
from .types import MessageType, coerce_message_type, is_request_type, is_response_type

if TYPE_CHECKING:
    from .ivalue import IValue

UNSET_MESSAGE_ID = -1

PayloadLike = bytes | bytearray | memoryview


class Message:
    """Envelope for one logical call or result moving between processes.

    A message owns its payload buffer and its handle list. A ``bytearray``
    payload and a ``list`` of handles are adopted as-is; any other buffer or
    iterable is converted once. Handles are opaque: copying a message copies
    the list, never the objects in it.

    ``move()``, ``move_payload()`` and ``move_handles()`` transfer ownership
    and leave the source empty but valid, so it can be reassigned or dropped.
    """

    __slots__ = ("_payload", "_handles", "_type", "_id")

    def __init__(
        self,
        payload: PayloadLike = b"",
        handles: Iterable[object] | None = None,
        message_type: MessageType | int = MessageType.UNKNOWN,
        message_id: int = UNSET_MESSAGE_ID,
    ) -> None:
        self._payload = _own_payload(payload)
        self._handles = _own_handles(handles)
        self._type = coerce_message_type(message_type)
        self._id = _require_int64(message_id)

    @classmethod
    def from_ivalue_tuple(cls, value: IValue) -> Message:
        """Rebuild a message from its four-slot tagged tuple."""
        from .codec import from_ivalue_tuple

        return from_ivalue_tuple(value)

    def to_ivalue_tuple(self) -> IValue:
        """Return the four-slot tagged tuple for this message."""
        from .codec import to_ivalue_tuple

        return to_ivalue_tuple(self)

    @property
    def payload(self) -> bytearray:
        """Mutable payload buffer owned by this message."""
        return self._payload

    def payload_view(self) -> memoryview:
        """Read-only view over the payload buffer."""
        return memoryview(self._payload).toreadonly()

    def move_payload(self) -> bytearray:
        """Transfer the payload buffer out, leaving this message with an empty one."""
        payload, self._payload = self._payload, bytearray()
        return payload

    @property
    def handles(self) -> list[object]:
        """Mutable, ordered handle list owned by this message."""
        return self._handles

    def handles_view(self) -> tuple[object, ...]:
        """Read-only snapshot of the handle sequence."""
        return tuple(self._handles)

    def move_handles(self) -> list[object]:
        """Transfer the handle list out, leaving this message with an empty one."""
        handles, self._handles = self._handles, []
        return handles

    @property
    def message_type(self) -> MessageType:
        return self._type

    @property
    def id(self) -> int:
        """Correlation id, or ``UNSET_MESSAGE_ID`` until the transport assigns one."""
        return self._id

    @id.setter
    def id(self, value: int) -> None:
        self.set_id(value)

    def set_id(self, message_id: int) -> None:
        self._id = _require_int64(message_id)

    def has_id(self) -> bool:
        return self._id != UNSET_MESSAGE_ID

    def is_request(self) -> bool:
        return is_request_type(self._type)

    def is_response(self) -> bool:
        return is_response_type(self._type)

    def copy(self) -> Message:
        """Return an independent duplicate; handle objects are shared."""
        return Message(bytearray(self._payload), list(self._handles), self._type, self._id)

    def move(self) -> Message:
        """Return a message owning this one's fields and reset this one to empty."""
        moved = Message(self.move_payload(), self.move_handles(), self._type, self._id)
        self._type = MessageType.UNKNOWN
        self._id = UNSET_MESSAGE_ID
        return moved

    def assign(self, other: Message, *, move: bool = False) -> Message:
        """Replace this message's contents with ``other``'s.

        A temporary is built first and then swapped in, so a failure while
        building it leaves ``self`` untouched. With ``move=True`` the buffers
        are taken from ``other`` instead of copied.
        """
        if other is self:
            return self
        replacement = other.move() if move else other.copy()
        replacement.swap(self)
        return self

    def swap(self, other: Message) -> None:
        """Exchange all four fields with ``other``."""
        self._payload, other._payload = other._payload, self._payload
        self._handles, other._handles = other._handles, self._handles
        self._type, other._type = other._type, self._type
        self._id, other._id = other._id, self._id

    def __copy__(self) -> Message:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return (
            self._type == other._type
            and self._id == other._id
            and self._payload == other._payload
            and len(self._handles) == len(other._handles)
            and all(a is b for a, b in zip(self._handles, other._handles))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Message(type={self._type.name}, id={self._id}, "
            f"payload_bytes={len(self._payload)}, handles={len(self._handles)})"
        )


def _own_payload(payload: PayloadLike) -> bytearray:
    """Adopt a ``bytearray`` as-is; copy other byte buffers once."""
    if isinstance(payload, bytearray):
        return payload
    if isinstance(payload, (bytes, memoryview)):
        return bytearray(payload)
    raise TypeError(f"payload must be a byte buffer, got {type(payload).__name__}")


def _own_handles(handles: Iterable[object] | None) -> list[object]:
    """Adopt a ``list`` as-is; materialize other iterables in order."""
    if handles is None:
        return []
    if isinstance(handles, list):
        return handles
    return list(handles)


def _require_int64(value: int) -> int:
    """Validate a correlation id against the signed 64-bit range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"message id must be an int, got {type(value).__name__}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"message id out of int64 range: {value}")
    return value
