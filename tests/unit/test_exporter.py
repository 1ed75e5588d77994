"""Unit tests for the structural exporter."""

from dataclasses import dataclass
from enum import Enum

import pytest

from spytial.config import ExportConfig, SpytialConfig
from spytial.errors import UnsupportedValueError
from spytial.export import (
    Exporter,
    NewType,
    NewTypeVariant,
    TupleRecord,
    TupleVariant,
    export,
    export_with_decorators,
    scalar,
    variant_of,
)
from conftest import Color, Company, Person, Plain


@variant_of("Shape")
@dataclass
class Circle:
    radius: int


@variant_of("Shape")
@dataclass
class Empty:
    pass


class Node:
    def __init__(self, x):
        self._x = x


class Kind(Enum):
    ALPHA_ONE = 1
    ALPHA_TWO = 2


def rows(document, name):
    """Atom id rows of a relation."""
    return [t.atoms for t in document.relation(name).tuples]


class TestScalarsAndSingletons:
    """Test leaf emission."""

    def test_scalar_atom(self):
        document = export(42)
        assert [(a.id, a.type, a.label) for a in document.atoms] == [("atom0", "int", "42")]
        assert document.relations == []

    def test_explicit_scalar_kind(self):
        assert export(scalar(255, "u8")).atoms[0].type == "u8"

    def test_equal_scalars_are_distinct_atoms(self):
        """Test data-bearing values are never deduplicated."""
        document = export([5, 5])
        assert len(document.atoms_of_type("int")) == 2

    def test_private_state_objects_are_distinct(self):
        """Test objects with only private attributes are never merged."""
        document = export([Node(1), Node(2)])
        nodes = document.atoms_of_type("Node")
        assert len(nodes) == 2
        assert [row[2] for row in rows(document, "idx")] == [a.id for a in nodes]

    def test_set_exported_in_sorted_order(self):
        document = export({"b", "c", "a"})
        assert [a.label for a in document.atoms_of_type("string")] == ["a", "b", "c"]

    def test_singletons_shared(self):
        """Test singleton kinds collapse to one atom per key."""
        document = export([None, None, True, False, True, (), ()])
        assert len(document.atoms_of_type("None")) == 1
        assert len(document.atoms_of_type("bool")) == 2
        assert len(document.atoms_of_type("unit")) == 1
        assert len(document.relation("idx").tuples) == 7

    def test_enum_singletons(self, colors):
        document = export(colors)
        red, black = document.atoms_of_type("Color")
        assert (red.label, black.label) == ("RED", "BLACK")
        elements = [row[2] for row in rows(document, "idx")]
        assert elements == [red.id, red.id, black.id, red.id, black.id]


class TestContainers:
    """Test container emission."""

    def test_sequence(self):
        document = export(["a", "b"])
        seq = document.atom("atom0")
        assert (seq.type, seq.label) == ("sequence", "seq[2]")
        assert rows(document, "idx") == [["atom0", "0", "atom1"], ["atom0", "1", "atom2"]]
        assert document.relation("idx").types == ["sequence", "index", "string"]

    def test_empty_sequence(self):
        document = export([])
        assert document.atoms[0].label == "seq[0]"
        assert document.relations == []

    def test_tuple(self):
        document = export((1, "x"))
        assert document.atoms[0].type == "tuple"
        assert document.atoms[0].label == "tuple[2]"
        # element column differs between rows and widens
        assert document.relation("idx").types == ["tuple", "index", "atom"]

    def test_map(self):
        document = export({"k": 1, "j": 2})
        assert (document.atoms[0].type, document.atoms[0].label) == ("map", "map[2]")
        assert rows(document, "map_entry") == [
            ["atom0", "atom1", "atom2"],
            ["atom0", "atom3", "atom4"],
        ]
        assert document.relation("map_entry").types == ["map", "string", "int"]

    def test_tuple_record(self):
        document = export(TupleRecord("Point", (1, 2)))
        assert (document.atoms[0].type, document.atoms[0].label) == ("tuple_struct", "Point")
        assert [row[1] for row in rows(document, "idx")] == ["0", "1"]

    def test_newtype(self):
        document = export(NewType("UserId", 9))
        assert (document.atoms[0].type, document.atoms[0].label) == ("newtype_struct", "UserId")
        assert rows(document, "value") == [["atom0", "atom1"]]

    def test_container_emitted_before_children(self):
        document = export([[1]])
        assert [a.label for a in document.atoms] == ["seq[1]", "seq[1]", "1"]


class TestRecordsAndVariants:
    """Test named aggregates and tagged-union cases."""

    def test_record_fields(self):
        document = export(Person("Alice", 30))
        person = document.atom("atom0")
        assert (person.type, person.label) == ("Person", "Person")
        assert rows(document, "name") == [["atom0", "atom1"]]
        assert rows(document, "age") == [["atom0", "atom2"]]
        assert document.relation("age").types == ["Person", "int"]
        assert document.relation("age").id == "age"

    def test_struct_variant(self):
        document = export(Circle(3))
        assert (document.atoms[0].type, document.atoms[0].label) == ("Shape", "Circle")
        assert rows(document, "radius") == [["atom0", "atom1"]]

    def test_variant_field_prefix(self):
        config = ExportConfig(variant_field_prefix="Circle_")
        document = export(Circle(3), config)
        assert document.relation("radius") is None
        assert rows(document, "Circle_radius") == [["atom0", "atom1"]]

    def test_unit_variant_singleton(self):
        document = export([Empty(), Empty()])
        assert len(document.atoms_of_type("Shape")) == 1

    def test_tuple_variant(self):
        document = export(TupleVariant("Msg", "Move", (1, 2)))
        assert (document.atoms[0].type, document.atoms[0].label) == ("Msg", "Move")
        assert document.relation("idx").types == ["Msg", "index", "int"]

    def test_newtype_variant(self):
        document = export(NewTypeVariant("Msg", "Text", "hi"))
        assert rows(document, "variant_value") == [["atom0", "atom1"]]

    def test_shared_field_name_widens_owner_column(self, company):
        """Test one relation per field name across record types."""
        document = export(company)
        name = document.relation("name")
        assert len(name.tuples) == 3
        assert name.types == ["atom", "string"]
        assert all(t.types == name.types for t in name.tuples)


class TestConfiguration:
    """Test export configuration."""

    def test_id_prefix(self):
        document = Exporter(ExportConfig(id_prefix="n")).export([1])
        assert [a.id for a in document.atoms] == ["n0", "n1"]

    def test_accepts_full_config(self):
        document = Exporter(SpytialConfig(export={"idPrefix": "q"})).export(1)
        assert document.atoms[0].id == "q0"

    def test_label_truncation(self):
        document = export("abcdefgh", ExportConfig(max_label_length=5))
        assert document.atoms[0].label == "abcd…"

    def test_singleton_labels_not_truncated(self):
        """Test singletons whose labels share a prefix stay distinguishable."""
        document = export([Kind.ALPHA_ONE, Kind.ALPHA_TWO, Kind.ALPHA_ONE], ExportConfig(max_label_length=4))
        assert [a.label for a in document.atoms_of_type("Kind")] == ["ALPHA_ONE", "ALPHA_TWO"]
        assert document.atoms[0].label == "seq…"

    def test_ids_restart_per_export(self):
        exporter = Exporter()
        exporter.export([1, 2])
        assert exporter.export(1).atoms[0].id == "atom0"


class TestExportWithDecorators:
    """Test decorator collection during the walk."""

    def test_root_type_excluded(self, company, context):
        _, decorators = export_with_decorators(company, context=context)
        assert decorators.constraints == ()
        assert [d.kind for d in decorators.directives] == ["atomColor"]

    def test_each_type_collected_once(self, company, context):
        """Test a repeated record type contributes its decorators once."""
        _, decorators = export_with_decorators([company, company], context=context)
        assert [d.kind for d in decorators.directives] == ["hideField", "atomColor"]
        assert len(decorators.constraints) == 1

    def test_explicit_root_type_name(self, company, context):
        _, decorators = export_with_decorators(company, root_type_name="Person", context=context)
        assert [c.kind for c in decorators.constraints] == ["orientation"]
        assert [d.kind for d in decorators.directives] == ["hideField"]

    def test_registered_decorators_used(self, context):
        from spytial.decorators import DecoratorSetBuilder

        context.register_type_decorators("Plain", DecoratorSetBuilder().flag("plain").build())
        _, decorators = export_with_decorators([Plain(1)], context=context)
        assert decorators.directives[0].flag == "plain"

    def test_instance_unchanged_by_collection(self, company, context):
        document, _ = export_with_decorators(company, context=context)
        assert document == export(company)


class TestFailures:
    """Test export failure propagation."""

    def test_unsupported_nested_value(self):
        with pytest.raises(UnsupportedValueError):
            export({"f": object()})

    def test_color_fixture_type(self):
        assert export(Color.RED).atoms[0].type == "Color"
