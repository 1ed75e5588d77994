"""Structural shapes of exportable values.

``describe(value)`` reflects a Python value into one ShapeView. Child values
inside a shape stay raw and are described when the exporter reaches them.
Custom types can describe themselves by implementing ``__spytial_shape__``
and returning any ShapeView.
"""

import dataclasses
import inspect
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Any, Union, get_args
from uuid import UUID

from pydantic import BaseModel

from ..errors import UnsupportedValueError

SHAPE_HOOK = "__spytial_shape__"
VARIANT_ATTRIBUTE = "__spytial_variant__"

SEQUENCE = "sequence"
TUPLE = "tuple"


@dataclass(frozen=True)
class Scalar:
    """A primitive value; ``kind`` is its precise type tag (e.g. 'int', 'u8')."""
    kind: str
    label: str


@dataclass(frozen=True)
class Singleton:
    """A value without identity: bool, absent marker, unit, unit struct."""
    kind: str
    label: str


@dataclass(frozen=True)
class SequenceShape:
    """Positional container; ``kind`` is 'sequence' or 'tuple'."""
    items: tuple[Any, ...]
    kind: str = SEQUENCE


@dataclass(frozen=True)
class MapShape:
    """Associative container of key/value pairs."""
    entries: tuple[tuple[Any, Any], ...]


@dataclass(frozen=True)
class Record:
    """Named-field aggregate. ``type_ref`` is the class declaring decorators."""
    name: str
    fields: tuple[tuple[str, Any], ...]
    type_ref: type | None = None


@dataclass(frozen=True)
class TupleRecord:
    """Named aggregate with positional fields."""
    name: str
    items: tuple[Any, ...]


@dataclass(frozen=True)
class NewType:
    """Named wrapper around exactly one value."""
    name: str
    value: Any


@dataclass(frozen=True)
class UnitVariant:
    """Tagged-union case without payload."""
    union: str
    case: str


@dataclass(frozen=True)
class TupleVariant:
    """Tagged-union case with positional payload."""
    union: str
    case: str
    items: tuple[Any, ...]


@dataclass(frozen=True)
class StructVariant:
    """Tagged-union case with named payload."""
    union: str
    case: str
    fields: tuple[tuple[str, Any], ...]


@dataclass(frozen=True)
class NewTypeVariant:
    """Tagged-union case wrapping exactly one value."""
    union: str
    case: str
    value: Any


ShapeView = Union[
    Scalar,
    Singleton,
    SequenceShape,
    MapShape,
    Record,
    TupleRecord,
    NewType,
    UnitVariant,
    TupleVariant,
    StructVariant,
    NewTypeVariant,
]

SHAPE_TYPES = get_args(ShapeView)

NONE = Singleton("None", "None")
UNIT = Singleton("unit", "()")
TRUE = Singleton("bool", "true")
FALSE = Singleton("bool", "false")


def scalar(value: Any, kind: str) -> Scalar:
    """Scalar with an explicit kind, e.g. ``scalar(7, "u8")``."""
    return Scalar(kind, str(value))


def unit_struct(name: str) -> Singleton:
    return Singleton("unit_struct", name)


def variant_of(union_name: str):
    """Class decorator marking a dataclass as one case of a tagged union.

    Instances export as atoms typed ``union_name`` and labelled with the
    class name. A case without fields is a singleton.
    """
    def decorator(cls):
        setattr(cls, VARIANT_ATTRIBUTE, union_name)
        return cls
    return decorator


def _bytes_label(value: bytes | bytearray | memoryview) -> str:
    return str(list(bytes(value)))


def _describe_scalar(value: Any) -> Scalar | None:
    if isinstance(value, int):
        return Scalar("int", str(value))
    if isinstance(value, float):
        return Scalar("float", repr(value))
    if isinstance(value, str):
        return Scalar("string", value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Scalar("bytes", _bytes_label(value))
    if isinstance(value, complex):
        return Scalar("complex", str(value))
    if isinstance(value, Decimal):
        return Scalar("decimal", str(value))
    if isinstance(value, Fraction):
        return Scalar("fraction", str(value))
    # datetime is a subclass of date
    if isinstance(value, datetime):
        return Scalar("datetime", value.isoformat())
    if isinstance(value, date):
        return Scalar("date", value.isoformat())
    if isinstance(value, time):
        return Scalar("time", value.isoformat())
    if isinstance(value, timedelta):
        return Scalar("timedelta", str(value))
    if isinstance(value, UUID):
        return Scalar("uuid", str(value))
    if isinstance(value, PurePath):
        return Scalar("path", str(value))
    return None


def _dataclass_fields(value: Any) -> tuple[tuple[str, Any], ...]:
    return tuple((f.name, getattr(value, f.name)) for f in dataclasses.fields(value))


def _model_fields(value: BaseModel) -> tuple[tuple[str, Any], ...]:
    return tuple((name, getattr(value, name)) for name in type(value).model_fields)


def _attribute_fields(value: Any, include_private: bool) -> tuple[tuple[str, Any], ...]:
    return tuple(
        (name, attr)
        for name, attr in vars(value).items()
        if include_private or not name.startswith("_")
    )


def _named(value: Any, fields: tuple[tuple[str, Any], ...], stateless: bool | None = None) -> ShapeView:
    """Record or variant for ``value``; singleton only when it carries no state.

    ``stateless`` defaults to having no fields. Plain objects whose state is
    all private export as field-less records, one atom per instance.
    """
    cls = type(value)
    if stateless is None:
        stateless = not fields
    union = getattr(cls, VARIANT_ATTRIBUTE, None)
    if union is not None:
        if stateless:
            return UnitVariant(union, cls.__name__)
        return StructVariant(union, cls.__name__, fields)
    if stateless:
        return unit_struct(cls.__name__)
    return Record(cls.__name__, fields, cls)


def _set_items(value: Set) -> tuple[Any, ...]:
    """Set elements in sorted order when comparable, else iteration order."""
    try:
        return tuple(sorted(value))
    except TypeError:
        return tuple(value)


def describe(value: Any, include_private: bool = False) -> ShapeView:
    """Reflect a value into its structural shape.

    Args:
        value: Any Python value
        include_private: Include underscore attributes of plain objects

    Returns:
        The ShapeView the exporter dispatches on

    Raises:
        UnsupportedValueError: If the value has no describable shape
    """
    if isinstance(value, SHAPE_TYPES):
        return value

    hook = getattr(type(value), SHAPE_HOOK, None)
    if hook is not None:
        shape = hook(value)
        if not isinstance(shape, SHAPE_TYPES):
            raise TypeError(
                f"{type(value).__name__}.{SHAPE_HOOK} returned {type(shape).__name__}, expected a ShapeView"
            )
        return shape

    if value is None:
        return NONE
    if isinstance(value, bool):
        return TRUE if value else FALSE
    # Enum before scalars: IntEnum and StrEnum members are also int/str
    if isinstance(value, Enum):
        return UnitVariant(type(value).__name__, value.name)

    described = _describe_scalar(value)
    if described is not None:
        return described

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _named(value, _dataclass_fields(value))
    if isinstance(value, BaseModel):
        return _named(value, _model_fields(value))

    if isinstance(value, tuple):
        if hasattr(type(value), "_fields"):
            return _named(value, tuple(zip(value._fields, value)))
        if not value:
            return UNIT
        return SequenceShape(value, TUPLE)

    if isinstance(value, Mapping):
        return MapShape(tuple(value.items()))
    if isinstance(value, Set):
        return SequenceShape(_set_items(value), SEQUENCE)
    if isinstance(value, Sequence):
        return SequenceShape(tuple(value), SEQUENCE)

    if (
        hasattr(value, "__dict__")
        and not isinstance(value, type)
        and not inspect.isroutine(value)
        and not inspect.ismodule(value)
    ):
        return _named(value, _attribute_fields(value, include_private), stateless=not vars(value))

    raise UnsupportedValueError(value)
