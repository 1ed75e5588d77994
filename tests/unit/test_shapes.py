"""Unit tests for structural shape reflection."""

from collections import OrderedDict, deque
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import PurePosixPath
from typing import NamedTuple
from uuid import UUID

import pytest
from pydantic import BaseModel

from spytial.errors import UnsupportedValueError
from spytial.export.shapes import (
    FALSE,
    NONE,
    TRUE,
    UNIT,
    MapShape,
    NewType,
    Record,
    Scalar,
    SequenceShape,
    Singleton,
    StructVariant,
    UnitVariant,
    describe,
    scalar,
    unit_struct,
    variant_of,
)
from conftest import Person, Plain


class Suit(Enum):
    HEARTS = 1
    SPADES = 2


class Point(NamedTuple):
    x: int
    y: int


class Account(BaseModel):
    owner: str
    balance: int


@variant_of("Shape")
class Circle:
    def __init__(self, radius):
        self.radius = radius


@variant_of("Shape")
class Nothing:
    pass


class Marker:
    pass


class WithPrivate:
    def __init__(self):
        self.visible = 1
        self._hidden = 2


class OnlyPrivate:
    def __init__(self, x):
        self._x = x


class SelfDescribing:
    def __spytial_shape__(self):
        return NewType("Wrapped", 7)


class BadHook:
    def __spytial_shape__(self):
        return 42


class TestSingletons:
    """Test values that describe as singletons."""

    def test_none_and_bools(self):
        assert describe(None) == NONE
        assert describe(True) == TRUE
        assert describe(False) == FALSE
        assert TRUE == Singleton("bool", "true")

    def test_empty_tuple_is_unit(self):
        assert describe(()) == UNIT

    def test_enum_member_is_unit_variant(self):
        """Test enum members carry the enum name and member name."""
        assert describe(Suit.HEARTS) == UnitVariant("Suit", "HEARTS")

    def test_fieldless_object_is_unit_struct(self):
        assert describe(Marker()) == unit_struct("Marker")

    def test_fieldless_variant_is_unit_variant(self):
        assert describe(Nothing()) == UnitVariant("Shape", "Nothing")


class TestScalars:
    """Test primitive values."""

    @pytest.mark.parametrize("value, kind, label", [
        (7, "int", "7"),
        (1.5, "float", "1.5"),
        ("hi", "string", "hi"),
        (b"\x01\x02", "bytes", "[1, 2]"),
        (Decimal("1.10"), "decimal", "1.10"),
        (date(2024, 1, 2), "date", "2024-01-02"),
        (datetime(2024, 1, 2, 3, 4, 5), "datetime", "2024-01-02T03:04:05"),
        (UUID(int=1), "uuid", "00000000-0000-0000-0000-000000000001"),
        (PurePosixPath("/tmp/x"), "path", "/tmp/x"),
    ])
    def test_scalar_kinds(self, value, kind, label):
        assert describe(value) == Scalar(kind, label)

    def test_bool_is_not_int_scalar(self):
        assert isinstance(describe(True), Singleton)

    def test_explicit_scalar_kind(self):
        """Test explicit scalars pass through unchanged."""
        assert describe(scalar(7, "u8")) == Scalar("u8", "7")


class TestContainers:
    """Test sequence, tuple and map shapes."""

    def test_list_is_sequence(self):
        assert describe([1, 2]) == SequenceShape((1, 2), "sequence")

    def test_deque_and_set_are_sequences(self):
        assert describe(deque([1])).kind == "sequence"
        assert describe({3}).items == (3,)

    def test_set_items_sorted(self):
        assert describe({"c", "a", "b"}).items == ("a", "b", "c")
        assert describe(frozenset([3, 1, 2])) == SequenceShape((1, 2, 3), "sequence")

    def test_unorderable_set_still_described(self):
        shape = describe({1, "a"})
        assert shape.kind == "sequence"
        assert sorted(shape.items, key=str) == [1, "a"]

    def test_tuple(self):
        assert describe((1, "a")) == SequenceShape((1, "a"), "tuple")

    def test_mapping_preserves_order(self):
        shape = describe(OrderedDict([("b", 2), ("a", 1)]))
        assert shape == MapShape((("b", 2), ("a", 1)))


class TestRecords:
    """Test named-field aggregates."""

    def test_dataclass(self):
        shape = describe(Person("Alice", 30))
        assert shape == Record("Person", (("name", "Alice"), ("age", 30)), Person)

    def test_named_tuple(self):
        shape = describe(Point(1, 2))
        assert isinstance(shape, Record)
        assert shape.fields == (("x", 1), ("y", 2))

    def test_pydantic_model(self):
        shape = describe(Account(owner="ann", balance=3))
        assert shape.name == "Account"
        assert shape.fields == (("owner", "ann"), ("balance", 3))

    def test_plain_object_skips_private(self):
        assert describe(WithPrivate()).fields == (("visible", 1),)

    def test_private_only_object_is_record(self):
        """Test hidden state keeps an object distinct instead of collapsing to a singleton."""
        assert describe(OnlyPrivate(1)) == Record("OnlyPrivate", (), OnlyPrivate)

    def test_plain_object_include_private(self):
        shape = describe(WithPrivate(), include_private=True)
        assert shape.fields == (("visible", 1), ("_hidden", 2))

    def test_struct_variant(self):
        assert describe(Circle(2)) == StructVariant("Shape", "Circle", (("radius", 2),))

    def test_record_type_ref(self):
        assert describe(Plain(1)).type_ref is Plain


class TestShapeHook:
    """Test custom types describing themselves."""

    def test_hook_result_used(self):
        assert describe(SelfDescribing()) == NewType("Wrapped", 7)

    def test_hook_must_return_shape(self):
        with pytest.raises(TypeError, match="expected a ShapeView"):
            describe(BadHook())


class TestUnsupported:
    """Test values without a describable shape."""

    def test_bare_object(self):
        with pytest.raises(UnsupportedValueError) as exc_info:
            describe(object())
        assert exc_info.value.value_type == "object"

    def test_function(self):
        with pytest.raises(UnsupportedValueError):
            describe(len)

    def test_class_object(self):
        with pytest.raises(UnsupportedValueError):
            describe(Person)
