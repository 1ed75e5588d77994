"""Emission state for one export: atoms, relations, singletons, decorators.

The serializer is the sink of the structural walk. Containers are emitted
through short-lived emitters that enforce the order of structural callbacks;
any out-of-order call raises TraversalContractError.
"""

from dataclasses import dataclass, field

from ..config import ExportConfig
from ..decorators.builder import DecoratorSetBuilder
from ..decorators.context import DecoratorContext
from ..errors import TraversalContractError
from ..models.decorators import DecoratorSet
from ..models.instance import Atom, InstanceDocument, InstanceTuple, Relation


GENERIC_TYPE = "atom"
INDEX_TYPE = "index"

IDX_RELATION = "idx"
MAP_ENTRY_RELATION = "map_entry"
VALUE_RELATION = "value"
VARIANT_VALUE_RELATION = "variant_value"

MAP_TYPE = "map"
TUPLE_STRUCT_TYPE = "tuple_struct"
NEWTYPE_STRUCT_TYPE = "newtype_struct"


@dataclass
class _RelationRows:
    """Rows collected under one relation name, in emission order."""
    name: str
    arity: int
    rows: list[tuple[list[str], list[str]]] = field(default_factory=list)

    def signature(self) -> list[str]:
        """Column tags shared by all rows; disagreeing columns widen to 'atom'."""
        columns = zip(*(types for _, types in self.rows))
        return [tags[0] if len(set(tags)) == 1 else GENERIC_TYPE for tags in columns]

    def build(self) -> Relation:
        types = self.signature()
        return Relation(
            id=self.name,
            name=self.name,
            types=types,
            tuples=[InstanceTuple(atoms=atoms, types=list(types)) for atoms, _ in self.rows],
        )


class InstanceSerializer:
    """Accumulates the atoms and relations of a single export call."""

    def __init__(
        self,
        config: ExportConfig | None = None,
        context: DecoratorContext | None = None,
        exclude_type: str | None = None,
    ):
        self.config = config or ExportConfig()
        self.context = context
        self.exclude_type = exclude_type

        self._counter = 0
        self._atoms: list[Atom] = []
        self._atom_types: dict[str, str] = {}
        self._relations: dict[str, _RelationRows] = {}
        self._singletons: dict[tuple[str, str], str] = {}
        self._visited_types: set[str] = set()
        self._decorators = DecoratorSetBuilder()

    # Atoms

    def _fresh_id(self) -> str:
        atom_id = f"{self.config.id_prefix}{self._counter}"
        self._counter += 1
        return atom_id

    def _label(self, label: str) -> str:
        limit = self.config.max_label_length
        if limit and len(label) > limit:
            return label[:max(limit - 1, 0)] + "…"
        return label

    def emit_atom(self, type_name: str, label: str, truncate: bool = True) -> str:
        atom_id = self._fresh_id()
        if truncate:
            label = self._label(label)
        self._atoms.append(Atom(id=atom_id, type=type_name, label=label))
        self._atom_types[atom_id] = type_name
        return atom_id

    def singleton(self, type_name: str, label: str) -> str:
        """Get or create the one atom for a (type, label) singleton key.

        Singleton labels are never truncated; the label is part of the key.
        """
        key = (type_name, label)
        existing = self._singletons.get(key)
        if existing is not None:
            return existing
        atom_id = self.emit_atom(type_name, label, truncate=False)
        self._singletons[key] = atom_id
        return atom_id

    def type_of(self, atom_id: str) -> str:
        return self._atom_types[atom_id]

    # Relations

    def push_relation(self, name: str, atoms: list[str], types: list[str]) -> None:
        if len(atoms) != len(types):
            raise TraversalContractError(
                f"Relation '{name}' row has {len(atoms)} atoms but {len(types)} type tags"
            )
        rows = self._relations.get(name)
        if rows is None:
            rows = self._relations[name] = _RelationRows(name, len(atoms))
        elif rows.arity != len(atoms):
            raise TraversalContractError(
                f"Relation '{name}' has arity {rows.arity}, got a row of arity {len(atoms)}"
            )
        rows.rows.append((atoms, types))

    # Containers

    def serialize_sequence(self, kind: str, length: int) -> "SequenceEmitter":
        label = f"seq[{length}]" if kind == "sequence" else f"{kind}[{length}]"
        return SequenceEmitter(self, self.emit_atom(kind, label), kind)

    def serialize_tuple_record(self, name: str) -> "SequenceEmitter":
        return SequenceEmitter(self, self.emit_atom(TUPLE_STRUCT_TYPE, name), TUPLE_STRUCT_TYPE)

    def serialize_map(self, length: int) -> "MapEmitter":
        return MapEmitter(self, self.emit_atom(MAP_TYPE, f"map[{length}]"))

    def serialize_record(self, name: str, type_ref: type | None = None) -> "RecordEmitter":
        record_id = self.emit_atom(name, name)
        self.collect_decorators_for_type(name, type_ref)
        return RecordEmitter(self, record_id, name)

    def serialize_newtype(self, name: str) -> "WrapperEmitter":
        return WrapperEmitter(self, self.emit_atom(NEWTYPE_STRUCT_TYPE, name), NEWTYPE_STRUCT_TYPE, VALUE_RELATION)

    def serialize_tuple_variant(self, union: str, case: str) -> "SequenceEmitter":
        return SequenceEmitter(self, self.emit_atom(union, case), union)

    def serialize_struct_variant(self, union: str, case: str) -> "RecordEmitter":
        return RecordEmitter(self, self.emit_atom(union, case), union, self.config.variant_field_prefix)

    def serialize_newtype_variant(self, union: str, case: str) -> "WrapperEmitter":
        return WrapperEmitter(self, self.emit_atom(union, case), union, VARIANT_VALUE_RELATION)

    # Decorators

    def collect_decorators_for_type(self, type_name: str, type_ref: type | None = None) -> None:
        """Merge a record type's decorators the first time it is met."""
        if self.context is None or type_name == self.exclude_type:
            return
        if type_name in self._visited_types:
            return
        self._visited_types.add(type_name)

        decorators = self.context.get_type_decorators(type_name)
        if decorators is None and type_ref is not None:
            decorators = self.context.types.ensure_registered(type_ref, type_name)
        if decorators is not None:
            self._decorators.extend(decorators)

    @property
    def visited_types(self) -> set[str]:
        return set(self._visited_types)

    # Output

    def finish(self) -> InstanceDocument:
        return InstanceDocument(
            atoms=list(self._atoms),
            relations=[rows.build() for rows in self._relations.values()],
        )

    def collected_decorators(self) -> DecoratorSet:
        return self._decorators.build()


class _Emitter:
    """Base for container emitters; unusable once ended."""

    def __init__(self, serializer: InstanceSerializer, container_id: str, container_type: str):
        self.serializer = serializer
        self.container_id = container_id
        self.container_type = container_type
        self._ended = False

    def _check_open(self) -> None:
        if self._ended:
            raise TraversalContractError(
                f"{type(self).__name__} for {self.container_id} used after end()"
            )

    def end(self) -> str:
        self._check_open()
        self._ended = True
        return self.container_id


class SequenceEmitter(_Emitter):
    """``idx(container, position, element)`` rows in traversal order."""

    def __init__(self, serializer: InstanceSerializer, container_id: str, container_type: str):
        super().__init__(serializer, container_id, container_type)
        self.index = 0

    def element(self, element_id: str) -> None:
        self._check_open()
        self.serializer.push_relation(
            IDX_RELATION,
            [self.container_id, str(self.index), element_id],
            [self.container_type, INDEX_TYPE, self.serializer.type_of(element_id)],
        )
        self.index += 1


class MapEmitter(_Emitter):
    """``map_entry(map, key, value)`` rows; every value needs a preceding key."""

    def __init__(self, serializer: InstanceSerializer, container_id: str):
        super().__init__(serializer, container_id, MAP_TYPE)
        self._key_id: str | None = None

    def key(self, key_id: str) -> None:
        self._check_open()
        if self._key_id is not None:
            raise TraversalContractError(
                f"Map {self.container_id} received key {key_id} while key {self._key_id} has no value"
            )
        self._key_id = key_id

    def value(self, value_id: str) -> None:
        self._check_open()
        if self._key_id is None:
            raise TraversalContractError(
                f"Map {self.container_id} received value {value_id} without a preceding key"
            )
        key_id, self._key_id = self._key_id, None
        self.serializer.push_relation(
            MAP_ENTRY_RELATION,
            [self.container_id, key_id, value_id],
            [MAP_TYPE, self.serializer.type_of(key_id), self.serializer.type_of(value_id)],
        )

    def end(self) -> str:
        if self._key_id is not None:
            raise TraversalContractError(
                f"Map {self.container_id} ended with key {self._key_id} missing its value"
            )
        return super().end()


class RecordEmitter(_Emitter):
    """One ``field(record, value)`` row per field, the relation named after the field."""

    def __init__(
        self, serializer: InstanceSerializer, container_id: str, container_type: str, prefix: str = ""
    ):
        super().__init__(serializer, container_id, container_type)
        self.prefix = prefix

    def field(self, name: str, value_id: str) -> None:
        self._check_open()
        self.serializer.push_relation(
            f"{self.prefix}{name}",
            [self.container_id, value_id],
            [self.container_type, self.serializer.type_of(value_id)],
        )


class WrapperEmitter(_Emitter):
    """Exactly one ``relation(wrapper, inner)`` row."""

    def __init__(
        self, serializer: InstanceSerializer, container_id: str, container_type: str, relation: str
    ):
        super().__init__(serializer, container_id, container_type)
        self.relation = relation
        self._wrapped = False

    def wrap(self, inner_id: str) -> None:
        self._check_open()
        if self._wrapped:
            raise TraversalContractError(f"Wrapper {self.container_id} already holds a value")
        self._wrapped = True
        self.serializer.push_relation(
            self.relation,
            [self.container_id, inner_id],
            [self.container_type, self.serializer.type_of(inner_id)],
        )

    def end(self) -> str:
        if not self._wrapped:
            raise TraversalContractError(f"Wrapper {self.container_id} ended without a value")
        return super().end()
