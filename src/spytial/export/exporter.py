"""Structural export of Python values into atoms and relations."""

import logging
from typing import Any

from ..config import ExportConfig, SpytialConfig
from ..decorators.context import DecoratorContext, get_default_context
from ..errors import UnsupportedValueError
from ..models.decorators import DecoratorSet
from ..models.instance import InstanceDocument
from .serializer import InstanceSerializer
from .shapes import (
    MapShape,
    NewType,
    NewTypeVariant,
    Record,
    Scalar,
    SequenceShape,
    Singleton,
    StructVariant,
    TupleRecord,
    TupleVariant,
    UnitVariant,
    describe,
)

logger = logging.getLogger(__name__)


class Exporter:
    """Walks a value and emits its relational instance.

    Each call to ``export`` or ``export_with_decorators`` starts with fresh
    atom ids, relations and singleton cache; the exporter itself holds only
    configuration and the decorator context.
    """

    def __init__(self, config: SpytialConfig | ExportConfig | None = None, context: DecoratorContext | None = None):
        if isinstance(config, SpytialConfig):
            config = config.export
        self.config = config or ExportConfig()
        self.context = context

    def export(self, value: Any) -> InstanceDocument:
        """Export a value into an instance document.

        Raises:
            UnsupportedValueError: If some reachable value has no describable shape
            TraversalContractError: If the emission sequence is malformed
        """
        serializer = InstanceSerializer(self.config)
        self._walk(serializer, value)
        document = serializer.finish()
        logger.debug(
            f"Exported {type(value).__name__}: {len(document.atoms)} atoms, "
            f"{len(document.relations)} relations"
        )
        return document

    def export_with_decorators(
        self, value: Any, root_type_name: str | None = None
    ) -> tuple[InstanceDocument, DecoratorSet]:
        """Export a value and gather the decorators of every record type met.

        The root type's own decorators are left out; they are combined with
        instance annotations by ``DecoratorContext.collect``.

        Args:
            value: Value to export
            root_type_name: Record type name to exclude, defaults to the
                class name of ``value``

        Returns:
            Tuple of (instance document, merged nested decorators)
        """
        context = self.context or get_default_context()
        if root_type_name is None:
            root_type_name = type(value).__name__

        serializer = InstanceSerializer(self.config, context, exclude_type=root_type_name)
        self._walk(serializer, value)
        document = serializer.finish()
        decorators = serializer.collected_decorators()
        logger.debug(
            f"Exported {type(value).__name__}: {len(document.atoms)} atoms, "
            f"{len(document.relations)} relations, {len(serializer.visited_types)} decorated types visited"
        )
        return document, decorators

    def _walk(self, serializer: InstanceSerializer, value: Any) -> str:
        shape = describe(value, self.config.include_private_attributes)

        if isinstance(shape, Scalar):
            return serializer.emit_atom(shape.kind, shape.label)

        if isinstance(shape, Singleton):
            return serializer.singleton(shape.kind, shape.label)

        if isinstance(shape, UnitVariant):
            return serializer.singleton(shape.union, shape.case)

        if isinstance(shape, SequenceShape):
            emitter = serializer.serialize_sequence(shape.kind, len(shape.items))
            for item in shape.items:
                emitter.element(self._walk(serializer, item))
            return emitter.end()

        if isinstance(shape, TupleRecord):
            emitter = serializer.serialize_tuple_record(shape.name)
            for item in shape.items:
                emitter.element(self._walk(serializer, item))
            return emitter.end()

        if isinstance(shape, MapShape):
            emitter = serializer.serialize_map(len(shape.entries))
            for key, item in shape.entries:
                emitter.key(self._walk(serializer, key))
                emitter.value(self._walk(serializer, item))
            return emitter.end()

        if isinstance(shape, Record):
            emitter = serializer.serialize_record(shape.name, shape.type_ref)
            for name, item in shape.fields:
                emitter.field(name, self._walk(serializer, item))
            return emitter.end()

        if isinstance(shape, NewType):
            emitter = serializer.serialize_newtype(shape.name)
            emitter.wrap(self._walk(serializer, shape.value))
            return emitter.end()

        if isinstance(shape, TupleVariant):
            emitter = serializer.serialize_tuple_variant(shape.union, shape.case)
            for item in shape.items:
                emitter.element(self._walk(serializer, item))
            return emitter.end()

        if isinstance(shape, StructVariant):
            emitter = serializer.serialize_struct_variant(shape.union, shape.case)
            for name, item in shape.fields:
                emitter.field(name, self._walk(serializer, item))
            return emitter.end()

        if isinstance(shape, NewTypeVariant):
            emitter = serializer.serialize_newtype_variant(shape.union, shape.case)
            emitter.wrap(self._walk(serializer, shape.value))
            return emitter.end()

        raise UnsupportedValueError(shape)


def export(value: Any, config: SpytialConfig | ExportConfig | None = None) -> InstanceDocument:
    """Export a value with a one-off Exporter."""
    return Exporter(config).export(value)


def export_with_decorators(
    value: Any,
    root_type_name: str | None = None,
    context: DecoratorContext | None = None,
    config: SpytialConfig | ExportConfig | None = None,
) -> tuple[InstanceDocument, DecoratorSet]:
    """Export a value and gather nested type decorators with a one-off Exporter."""
    return Exporter(config, context).export_with_decorators(value, root_type_name)
