"""Tests for message <-> tagged tuple conversion."""

from __future__ import annotations

import logging

import pytest

from packages.dist_rpc.errors import (
    MessageDecodeError,
    MessageSlotTypeError,
    MessageStructureError,
    codes,
)
from packages.dist_rpc.logging import ContextFilter
from packages.dist_rpc.message import (
    MESSAGE_TUPLE_SIZE,
    IValue,
    IValueTag,
    Message,
    MessageSlot,
    MessageType,
    from_ivalue_tuple,
    to_ivalue_tuple,
)


def _valid_slots() -> list[IValue]:
    """Return four well-formed slot values."""
    return [
        IValue.from_string(b"payload"),
        IValue.from_handles([]),
        IValue.from_int(int(MessageType.SCRIPT_CALL)),
        IValue.from_int(5),
    ]


def _tuple_with(slot: MessageSlot, value: IValue) -> IValue:
    """Return a valid tuple with one slot replaced."""
    slots = _valid_slots()
    slots[slot] = value
    return IValue.from_tuple(slots)


def test_to_ivalue_tuple_uses_fixed_slot_order() -> None:
    """Encoded tuple should be payload, handles, type, id."""
    handle = object()
    message = Message(b"abc", [handle], MessageType.REMOTE_RET, 11)

    encoded = to_ivalue_tuple(message)

    slots = encoded.to_tuple()
    assert len(slots) == MESSAGE_TUPLE_SIZE == 4
    assert slots[MessageSlot.PAYLOAD].to_string_ref() == b"abc"
    assert slots[MessageSlot.HANDLES].to_handle_list()[0] is handle
    assert slots[MessageSlot.TYPE].to_int() == int(MessageType.REMOTE_RET)
    assert slots[MessageSlot.ID].to_int() == 11


def test_to_ivalue_tuple_does_not_mutate_message() -> None:
    """Encoding should leave the message untouched."""
    message = Message(b"abc", [object()], MessageType.SCRIPT_CALL, 3)
    before = message.copy()

    to_ivalue_tuple(message)

    assert message == before


def test_round_trip_preserves_all_fields() -> None:
    """Decoding an encoded message should reproduce all four fields."""
    message = Message(b"\x00\x01binary\xff", [object()], MessageType.BACKWARD_AUTOGRAD_REQ, 1 << 40)

    decoded = from_ivalue_tuple(to_ivalue_tuple(message))

    assert decoded == message
    assert decoded.payload is not message.payload


def test_round_trip_preserves_handle_order() -> None:
    """Handles [h0, h1, h2] should come back in the same order."""
    h0, h1, h2 = object(), object(), object()
    message = Message(b"", [h0, h1, h2], MessageType.PYTHON_CALL, 1)

    decoded = Message.from_ivalue_tuple(message.to_ivalue_tuple())

    assert decoded.handles[0] is h0
    assert decoded.handles[1] is h1
    assert decoded.handles[2] is h2


def test_round_trip_of_unset_id_keeps_sentinel() -> None:
    """A message without id should decode with the unset sentinel."""
    message = Message(b"x", [], MessageType.SCRIPT_CALL)

    assert from_ivalue_tuple(to_ivalue_tuple(message)).id == message.id


def test_non_tuple_input_raises_structure_error() -> None:
    """A list value or raw Python tuple is not a message tuple."""
    with pytest.raises(MessageStructureError) as exc_info:
        from_ivalue_tuple(IValue.from_handles([]))
    assert exc_info.value.code == codes.MALFORMED_MESSAGE_TUPLE

    with pytest.raises(MessageStructureError):
        from_ivalue_tuple((b"", [], 0, 0))


def test_three_slot_tuple_raises_structure_error() -> None:
    """Tuples without exactly four slots should be rejected."""
    with pytest.raises(MessageStructureError) as exc_info:
        from_ivalue_tuple(IValue.from_tuple(_valid_slots()[:3]))

    assert exc_info.value.code == codes.MESSAGE_TUPLE_ARITY
    assert "4 elements" in str(exc_info.value)


@pytest.mark.parametrize(
    ("slot", "bad_value", "expected"),
    [
        (MessageSlot.PAYLOAD, IValue.from_int(1), "string"),
        (MessageSlot.HANDLES, IValue.from_string(b"h"), "list"),
        (MessageSlot.TYPE, IValue.from_string(b"0"), "int"),
        (MessageSlot.ID, IValue.none(), "int"),
    ],
)
def test_wrong_slot_variant_raises_slot_type_error(
    slot: MessageSlot, bad_value: IValue, expected: str
) -> None:
    """Each slot should be checked for its expected variant."""
    with pytest.raises(MessageSlotTypeError) as exc_info:
        from_ivalue_tuple(_tuple_with(slot, bad_value))

    error = exc_info.value
    assert error.slot == slot.name.lower()
    assert error.expected == expected
    assert error.code == codes.INVALID_SLOT_TYPE
    assert isinstance(error, MessageDecodeError)


def test_handle_slot_with_list_of_ints_raises_slot_type_error() -> None:
    """A non-empty list of ints in the handle slot should be rejected."""
    ints = IValue.from_list([IValue.from_int(1)], element_tag=IValueTag.INT)

    with pytest.raises(MessageSlotTypeError) as exc_info:
        from_ivalue_tuple(_tuple_with(MessageSlot.HANDLES, ints))

    assert exc_info.value.expected == "list of handle"
    assert exc_info.value.actual == "list of int"


def test_unknown_type_tag_is_rejected() -> None:
    """An int type tag outside MessageType should fail the conversion."""
    with pytest.raises(MessageSlotTypeError) as exc_info:
        from_ivalue_tuple(_tuple_with(MessageSlot.TYPE, IValue.from_int(23)))

    assert exc_info.value.code == codes.UNKNOWN_MESSAGE_TYPE
    assert exc_info.value.slot == "type"
    assert exc_info.value.actual == "23"


def test_decode_failure_logs_slot_context(caplog: pytest.LogCaptureFixture) -> None:
    """Decode failures should emit a warning carrying slot context fields."""
    caplog.handler.addFilter(ContextFilter())
    caplog.set_level(logging.WARNING, logger="packages.dist_rpc.message.codec")

    with pytest.raises(MessageSlotTypeError):
        from_ivalue_tuple(_tuple_with(MessageSlot.ID, IValue.from_string(b"1")))

    records = [r for r in caplog.records if r.name == "packages.dist_rpc.message.codec"]
    assert len(records) == 1
    assert records[0].levelno == logging.WARNING
    assert getattr(records[0], "slot") == "id"
    assert getattr(records[0], "error_code") == codes.INVALID_SLOT_TYPE


def test_directly_built_slot_values_are_validated_before_decoding() -> None:
    """Malformed slot values cannot be built, so they never decode silently."""
    with pytest.raises(TypeError):
        _tuple_with(MessageSlot.PAYLOAD, IValue(IValueTag.STRING, 5))
    with pytest.raises(ValueError):
        _tuple_with(MessageSlot.ID, IValue(IValueTag.INT, 1 << 70))
    with pytest.raises(TypeError):
        from_ivalue_tuple(IValue(IValueTag.TUPLE, None))


def test_directly_built_tuples_go_through_decoder_checks() -> None:
    """Tuples built with the dataclass constructor get the same decode errors."""
    short = IValue(IValueTag.TUPLE, tuple(_valid_slots()[:3]))
    with pytest.raises(MessageStructureError):
        from_ivalue_tuple(short)

    slots = _valid_slots()
    slots[MessageSlot.PAYLOAD] = IValue(IValueTag.INT, 5)
    with pytest.raises(MessageSlotTypeError) as exc_info:
        from_ivalue_tuple(IValue(IValueTag.TUPLE, tuple(slots)))
    assert exc_info.value.slot == "payload"

    decoded = from_ivalue_tuple(IValue(IValueTag.TUPLE, tuple(_valid_slots())))
    assert bytes(decoded.payload) == b"payload"
    assert decoded.id == 5
