"""Models for the relational instance document (atoms + relations)."""

from pydantic import BaseModel, ConfigDict, Field


class Atom(BaseModel):
    """A single node of the exported graph."""
    id: str
    type: str  # Primitive kind, declared type name or shape tag
    label: str

    model_config = ConfigDict(frozen=True)


class InstanceTuple(BaseModel):
    """One row of a relation: atom ids plus their column type tags."""
    atoms: list[str]
    types: list[str]

    @property
    def arity(self) -> int:
        return len(self.atoms)


class Relation(BaseModel):
    """A named, typed set of tuples connecting atoms."""
    id: str
    name: str
    types: list[str]
    tuples: list[InstanceTuple] = Field(default_factory=list)

    @property
    def arity(self) -> int:
        return len(self.types)


class InstanceDocument(BaseModel):
    """Complete exported instance consumed by the visualization front-end."""
    atoms: list[Atom] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)

    def atom(self, atom_id: str) -> Atom | None:
        """Get an atom by id."""
        for atom in self.atoms:
            if atom.id == atom_id:
                return atom
        return None

    def relation(self, name: str) -> Relation | None:
        """Get a relation by name."""
        for relation in self.relations:
            if relation.name == name:
                return relation
        return None

    def atoms_of_type(self, type_name: str) -> list[Atom]:
        """Get all atoms with the given type tag."""
        return [atom for atom in self.atoms if atom.type == type_name]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return self.model_dump()

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to the JSON wire format."""
        return self.model_dump_json(indent=indent)
