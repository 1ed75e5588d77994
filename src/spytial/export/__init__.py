"""Structural export of Python values into relational instances."""

from .exporter import Exporter, export, export_with_decorators
from .serializer import InstanceSerializer, MapEmitter, RecordEmitter, SequenceEmitter, WrapperEmitter
from .shapes import (
    FALSE,
    NONE,
    TRUE,
    UNIT,
    MapShape,
    NewType,
    NewTypeVariant,
    Record,
    Scalar,
    SequenceShape,
    ShapeView,
    Singleton,
    StructVariant,
    TupleRecord,
    TupleVariant,
    UnitVariant,
    describe,
    scalar,
    unit_struct,
    variant_of,
)

__all__ = [
    "Exporter",
    "export",
    "export_with_decorators",
    "InstanceSerializer",
    "SequenceEmitter",
    "MapEmitter",
    "RecordEmitter",
    "WrapperEmitter",
    "ShapeView",
    "Scalar",
    "Singleton",
    "SequenceShape",
    "MapShape",
    "Record",
    "TupleRecord",
    "NewType",
    "UnitVariant",
    "TupleVariant",
    "StructVariant",
    "NewTypeVariant",
    "NONE",
    "UNIT",
    "TRUE",
    "FALSE",
    "describe",
    "scalar",
    "unit_struct",
    "variant_of",
]
