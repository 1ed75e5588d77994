"""Models for layout constraints and visual directives.

Each record serializes as a single-key mapping whose key is the decorator
kind, e.g. ``{"atomColor": {"selector": "Person", "value": "red"}}``. Key
casing is part of the wire format read by the renderer.
"""

from typing import Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field

_PARAMS_CONFIG = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class _Record(BaseModel):
    """Base for single-key decorator records."""
    KIND: ClassVar[str] = ""

    model_config = _PARAMS_CONFIG

    @property
    def kind(self) -> str:
        return self.KIND

    @property
    def params(self) -> dict[str, Any]:
        """Parameters of this record with wire-format key names."""
        value = self.model_dump(by_alias=True, exclude_none=True, mode="json")[self.KIND]
        return value if isinstance(value, dict) else {"name": value}


# Constraint parameters

class OrientationParams(BaseModel):
    selector: str
    directions: list[str]

    model_config = _PARAMS_CONFIG


class CyclicParams(BaseModel):
    selector: str
    direction: str

    model_config = _PARAMS_CONFIG


class FieldGroupParams(BaseModel):
    """Group members selected by a field and a pair of tuple positions."""
    field: str
    group_on: int = Field(alias="groupOn", ge=0)
    add_to_group: int = Field(alias="addToGroup", ge=0)
    selector: str | None = None

    model_config = _PARAMS_CONFIG


class SelectorGroupParams(BaseModel):
    """Group members selected by a free-form selector with a group name."""
    selector: str
    name: str

    model_config = _PARAMS_CONFIG


GroupParams = Union[FieldGroupParams, SelectorGroupParams]


class OrientationConstraint(_Record):
    KIND: ClassVar[str] = "orientation"
    orientation: OrientationParams


class CyclicConstraint(_Record):
    KIND: ClassVar[str] = "cyclic"
    cyclic: CyclicParams


class GroupConstraint(_Record):
    KIND: ClassVar[str] = "group"
    group: GroupParams


Constraint = Union[OrientationConstraint, CyclicConstraint, GroupConstraint]


# Directive parameters

class AtomColorParams(BaseModel):
    selector: str
    value: str

    model_config = _PARAMS_CONFIG


class EdgeColorParams(BaseModel):
    field: str
    value: str
    selector: str | None = None

    model_config = _PARAMS_CONFIG


class SizeParams(BaseModel):
    selector: str
    height: int = Field(ge=0)
    width: int = Field(ge=0)

    model_config = _PARAMS_CONFIG


class IconParams(BaseModel):
    selector: str
    path: str
    show_labels: bool = Field(alias="showLabels")

    model_config = _PARAMS_CONFIG


class ProjectionParams(BaseModel):
    sig: str

    model_config = _PARAMS_CONFIG


class AttributeParams(BaseModel):
    field: str
    selector: str | None = None

    model_config = _PARAMS_CONFIG


class HideFieldParams(BaseModel):
    field: str
    selector: str | None = None

    model_config = _PARAMS_CONFIG


class HideAtomParams(BaseModel):
    selector: str

    model_config = _PARAMS_CONFIG


class InferredEdgeParams(BaseModel):
    name: str
    selector: str

    model_config = _PARAMS_CONFIG


class AtomColorDirective(_Record):
    KIND: ClassVar[str] = "atomColor"
    atom_color: AtomColorParams = Field(alias="atomColor")


class EdgeColorDirective(_Record):
    KIND: ClassVar[str] = "edgeColor"
    edge_color: EdgeColorParams = Field(alias="edgeColor")


class SizeDirective(_Record):
    KIND: ClassVar[str] = "size"
    size: SizeParams


class IconDirective(_Record):
    KIND: ClassVar[str] = "icon"
    icon: IconParams


class ProjectionDirective(_Record):
    KIND: ClassVar[str] = "projection"
    projection: ProjectionParams


class AttributeDirective(_Record):
    KIND: ClassVar[str] = "attribute"
    attribute: AttributeParams


class HideFieldDirective(_Record):
    KIND: ClassVar[str] = "hideField"
    hide_field: HideFieldParams = Field(alias="hideField")


class HideAtomDirective(_Record):
    KIND: ClassVar[str] = "hideAtom"
    hide_atom: HideAtomParams = Field(alias="hideAtom")


class InferredEdgeDirective(_Record):
    KIND: ClassVar[str] = "inferredEdge"
    inferred_edge: InferredEdgeParams = Field(alias="inferredEdge")


class FlagDirective(_Record):
    """A bare marker with no further parameters."""
    KIND: ClassVar[str] = "flag"
    flag: str


Directive = Union[
    AtomColorDirective,
    EdgeColorDirective,
    SizeDirective,
    IconDirective,
    ProjectionDirective,
    AttributeDirective,
    HideFieldDirective,
    HideAtomDirective,
    InferredEdgeDirective,
    FlagDirective,
]

CONSTRAINT_TYPES: dict[str, type[_Record]] = {
    cls.KIND: cls for cls in (OrientationConstraint, CyclicConstraint, GroupConstraint)
}

DIRECTIVE_TYPES: dict[str, type[_Record]] = {
    cls.KIND: cls
    for cls in (
        AtomColorDirective,
        EdgeColorDirective,
        SizeDirective,
        IconDirective,
        ProjectionDirective,
        AttributeDirective,
        HideFieldDirective,
        HideAtomDirective,
        InferredEdgeDirective,
        FlagDirective,
    )
}


class DecoratorSet(BaseModel):
    """Ordered constraints and directives for a type or an instance."""
    constraints: tuple[Constraint, ...] = ()
    directives: tuple[Directive, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return not self.constraints and not self.directives

    def merge(self, other: "DecoratorSet") -> "DecoratorSet":
        """Concatenate ``other`` after this set; no deduplication."""
        return merge(self, other)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the decorator document layout."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "DecoratorSet":
        """Build from the decorator document layout."""
        data = data or {}
        return cls(
            constraints=tuple(data.get("constraints") or ()),
            directives=tuple(data.get("directives") or ()),
        )


def merge(*sets: DecoratorSet) -> DecoratorSet:
    """Merge decorator sets by concatenation, preserving argument order."""
    constraints: list = []
    directives: list = []
    for decorator_set in sets:
        constraints.extend(decorator_set.constraints)
        directives.extend(decorator_set.directives)
    return DecoratorSet(constraints=tuple(constraints), directives=tuple(directives))
