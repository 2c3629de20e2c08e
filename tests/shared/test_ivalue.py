"""Tests for the tagged cross-boundary value type."""

from __future__ import annotations

import pytest

from packages.dist_rpc.message import INT64_MAX, INT64_MIN, IValue, IValueTag


def test_variant_tests_match_constructor() -> None:
    """Each constructor should produce exactly one matching variant test."""
    cases = {
        "none": IValue.none(),
        "int": IValue.from_int(1),
        "string": IValue.from_string(b"x"),
        "list": IValue.from_handles([object()]),
        "tuple": IValue.from_tuple([IValue.none()]),
        "handle": IValue.from_handle(object()),
    }

    for name, value in cases.items():
        flags = {
            "none": value.is_none(),
            "int": value.is_int(),
            "string": value.is_string(),
            "list": value.is_list(),
            "tuple": value.is_tuple(),
            "handle": value.is_handle(),
        }
        assert [key for key, flag in flags.items() if flag] == [name]


def test_from_string_encodes_text_as_utf8() -> None:
    """Text input should be stored as UTF-8 bytes."""
    assert IValue.from_string("héllo").to_string_ref() == "héllo".encode("utf-8")
    assert IValue.from_string(bytearray(b"\x00\xff")).to_string_ref() == b"\x00\xff"


def test_from_int_enforces_int64_range_and_rejects_bool() -> None:
    """Ints outside int64 and bools should not become INT values."""
    assert IValue.from_int(INT64_MIN).to_int() == INT64_MIN
    assert IValue.from_int(INT64_MAX).to_int() == INT64_MAX

    with pytest.raises(ValueError):
        IValue.from_int(INT64_MAX + 1)
    with pytest.raises(TypeError):
        IValue.from_int(True)


def test_from_list_requires_homogeneous_items() -> None:
    """Lists should reject items whose tag differs from the element tag."""
    with pytest.raises(TypeError):
        IValue.from_list([IValue.from_int(1), IValue.none()], element_tag=IValueTag.INT)


def test_from_tuple_rejects_raw_python_values() -> None:
    """Tuple items must already be tagged values."""
    with pytest.raises(TypeError):
        IValue.from_tuple([1, 2])  # type: ignore[list-item]


def test_extractors_raise_type_error_on_wrong_variant() -> None:
    """Extracting a different variant than the stored one should fail."""
    value = IValue.from_int(3)

    with pytest.raises(TypeError):
        value.to_string_ref()
    with pytest.raises(TypeError):
        value.to_tuple()
    with pytest.raises(TypeError):
        value.to_handle_list()


def test_to_handle_list_preserves_order_and_identity() -> None:
    """Handle lists should return the same handle objects in order."""
    handles = [object(), object(), object()]

    decoded = IValue.from_handles(handles).to_handle_list()

    assert len(decoded) == 3
    assert all(a is b for a, b in zip(decoded, handles))


def test_to_handle_list_rejects_list_of_other_variant() -> None:
    """A non-empty list of ints is not a handle list."""
    ints = IValue.from_list([IValue.from_int(1)], element_tag=IValueTag.INT)

    with pytest.raises(TypeError):
        ints.to_handle_list()


@pytest.mark.parametrize(
    ("tag", "raw", "error"),
    [
        (IValueTag.STRING, 5, TypeError),
        (IValueTag.STRING, "text", TypeError),
        (IValueTag.TUPLE, None, TypeError),
        (IValueTag.TUPLE, [IValue.none()], TypeError),
        (IValueTag.TUPLE, (1, 2), TypeError),
        (IValueTag.INT, 1 << 70, ValueError),
        (IValueTag.INT, False, TypeError),
        (IValueTag.INT, "1", TypeError),
        (IValueTag.NONE, 0, TypeError),
    ],
)
def test_direct_construction_validates_shape(
    tag: IValueTag, raw: object, error: type[Exception]
) -> None:
    """The dataclass constructor should apply the same shape rules as from_*."""
    with pytest.raises(error):
        IValue(tag, raw)


def test_direct_list_construction_requires_matching_element_tag() -> None:
    """Direct LIST construction should enforce element_tag and homogeneity."""
    with pytest.raises(TypeError):
        IValue(IValueTag.LIST, (IValue.from_int(1),))
    with pytest.raises(TypeError):
        IValue(IValueTag.LIST, (IValue.from_int(1),), element_tag=IValueTag.HANDLE)
    with pytest.raises(TypeError):
        IValue(IValueTag.INT, 1, element_tag=IValueTag.INT)

    value = IValue(IValueTag.LIST, (IValue.from_int(1),), element_tag=IValueTag.INT)
    assert value.to_list()[0].to_int() == 1
