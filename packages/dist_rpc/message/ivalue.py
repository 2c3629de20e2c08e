"""Tagged value used to carry a message across a process/language boundary.

``IValue`` is a small sum type: every instance has exactly one ``IValueTag``
and a payload whose Python shape is fixed by that tag. The shape is checked
whenever an instance is built, whether through the ``from_*`` constructors or
the dataclass constructor itself, so a decoder can rely on the variant tests.
Consumers test the variant first (``is_tuple``, ``is_string``, ...) and only
then extract; an extractor called on the wrong variant raises ``TypeError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable

INT64_MIN: Final[int] = -(1 << 63)
INT64_MAX: Final[int] = (1 << 63) - 1


class IValueTag(str, Enum):
    """Variants supported by the cross-boundary value representation."""

    NONE = "none"
    INT = "int"
    STRING = "string"
    LIST = "list"
    TUPLE = "tuple"
    HANDLE = "handle"


@dataclass(frozen=True, slots=True)
class IValue:
    """One dynamically typed value.

    Payload shapes by tag:
    - ``NONE``: ``None``
    - ``INT``: ``int`` within the int64 range, never ``bool``
    - ``STRING``: ``bytes``
    - ``LIST``: ``tuple[IValue, ...]`` whose items all carry ``element_tag``
    - ``TUPLE``: ``tuple[IValue, ...]`` of any variants
    - ``HANDLE``: an opaque handle object, passed through untouched

    Raises ``TypeError`` when ``value`` does not have the shape its tag
    requires and ``ValueError`` for INT values outside int64.
    """

    tag: IValueTag
    value: object = None
    element_tag: IValueTag | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.tag, IValueTag):
            raise TypeError(f"tag must be an IValueTag, got {type(self.tag).__name__}")
        if self.tag is IValueTag.LIST:
            if not isinstance(self.element_tag, IValueTag):
                raise TypeError("list value requires an element_tag")
        elif self.element_tag is not None:
            raise TypeError(f"{self.tag.value} value must not carry an element_tag")
        _SHAPE_CHECKS[self.tag](self)

    @classmethod
    def none(cls) -> IValue:
        """Return the empty value."""
        return cls(tag=IValueTag.NONE)

    @classmethod
    def from_int(cls, value: int) -> IValue:
        """Wrap a 64-bit signed integer."""
        return cls(tag=IValueTag.INT, value=value)

    @classmethod
    def from_string(cls, value: str | bytes | bytearray | memoryview) -> IValue:
        """Wrap text (UTF-8 encoded) or a byte string."""
        if isinstance(value, str):
            return cls(tag=IValueTag.STRING, value=value.encode("utf-8"))
        if isinstance(value, (bytearray, memoryview)):
            return cls(tag=IValueTag.STRING, value=bytes(value))
        return cls(tag=IValueTag.STRING, value=value)

    @classmethod
    def from_handle(cls, handle: object) -> IValue:
        """Wrap one opaque binary-data handle."""
        return cls(tag=IValueTag.HANDLE, value=handle)

    @classmethod
    def from_list(cls, items: Iterable[IValue], *, element_tag: IValueTag) -> IValue:
        """Build a homogeneous list; every item must carry ``element_tag``."""
        return cls(tag=IValueTag.LIST, value=tuple(items), element_tag=element_tag)

    @classmethod
    def from_handles(cls, handles: Iterable[object]) -> IValue:
        """Build a handle list preserving the order of ``handles``."""
        return cls.from_list(
            (cls.from_handle(handle) for handle in handles),
            element_tag=IValueTag.HANDLE,
        )

    @classmethod
    def from_tuple(cls, items: Iterable[IValue]) -> IValue:
        """Build a fixed-size tuple of arbitrary variants."""
        return cls(tag=IValueTag.TUPLE, value=tuple(items))

    def is_none(self) -> bool:
        """Return ``True`` for the empty value."""
        return self.tag is IValueTag.NONE

    def is_int(self) -> bool:
        """Return ``True`` for an int64 value."""
        return self.tag is IValueTag.INT

    def is_string(self) -> bool:
        """Return ``True`` for a byte-string value."""
        return self.tag is IValueTag.STRING

    def is_list(self) -> bool:
        """Return ``True`` for a homogeneous list value."""
        return self.tag is IValueTag.LIST

    def is_tuple(self) -> bool:
        """Return ``True`` for a tuple value."""
        return self.tag is IValueTag.TUPLE

    def is_handle(self) -> bool:
        """Return ``True`` for a single handle value."""
        return self.tag is IValueTag.HANDLE

    def to_int(self) -> int:
        """Return the wrapped int."""
        self._require(IValueTag.INT)
        return self.value  # type: ignore[return-value]

    def to_string_ref(self) -> bytes:
        """Return the wrapped bytes without copying."""
        self._require(IValueTag.STRING)
        return self.value  # type: ignore[return-value]

    def to_list(self) -> tuple[IValue, ...]:
        """Return list items in order."""
        self._require(IValueTag.LIST)
        return self.value  # type: ignore[return-value]

    def to_tuple(self) -> tuple[IValue, ...]:
        """Return tuple items in order."""
        self._require(IValueTag.TUPLE)
        return self.value  # type: ignore[return-value]

    def to_handle(self) -> object:
        """Return the wrapped handle object itself."""
        self._require(IValueTag.HANDLE)
        return self.value

    def to_handle_list(self) -> list[object]:
        """Return list items as a new, order-preserving list of handles."""
        items = self.to_list()
        if items and self.element_tag is not IValueTag.HANDLE:
            raise TypeError(
                f"expected list of {IValueTag.HANDLE.value}, "
                f"got list of {self.element_tag.value if self.element_tag else 'unknown'}"
            )
        return [item.to_handle() for item in items]

    def _require(self, tag: IValueTag) -> None:
        """Raise ``TypeError`` unless this value carries ``tag``."""
        if self.tag is not tag:
            raise TypeError(f"expected {tag.value} value, got {self.tag.value}")


def _check_none(value: IValue) -> None:
    if value.value is not None:
        raise TypeError(f"none value must wrap None, got {_describe(value.value)}")


def _check_int(value: IValue) -> None:
    raw = value.value
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise TypeError(f"int value required, got {_describe(raw)}")
    if not INT64_MIN <= raw <= INT64_MAX:
        raise ValueError(f"int value out of int64 range: {raw}")


def _check_string(value: IValue) -> None:
    if not isinstance(value.value, bytes):
        raise TypeError(f"string value must wrap bytes, got {_describe(value.value)}")


def _check_items(value: IValue) -> None:
    items = value.value
    if not isinstance(items, tuple):
        raise TypeError(f"{value.tag.value} value must wrap a tuple, got {_describe(items)}")
    for index, item in enumerate(items):
        if not isinstance(item, IValue):
            raise TypeError(
                f"{value.tag.value} item {index} must be an IValue, got {_describe(item)}"
            )
        if value.element_tag is not None and item.tag is not value.element_tag:
            raise TypeError(
                f"list item {index} must be {value.element_tag.value}, got {item.tag.value}"
            )


def _check_handle(value: IValue) -> None:
    # Handles are opaque; any object is accepted.
    return None


_SHAPE_CHECKS = {
    IValueTag.NONE: _check_none,
    IValueTag.INT: _check_int,
    IValueTag.STRING: _check_string,
    IValueTag.LIST: _check_items,
    IValueTag.TUPLE: _check_items,
    IValueTag.HANDLE: _check_handle,
}


def _describe(value: object) -> str:
    """Return a short variant/type name for error messages."""
    if isinstance(value, IValue):
        return value.tag.value
    return type(value).__name__
