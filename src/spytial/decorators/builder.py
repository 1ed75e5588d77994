"""Fluent builders for decorator sets and runtime annotations."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from ..errors import DecoratorValidationError
from ..models.decorators import (
    CONSTRAINT_TYPES,
    DIRECTIVE_TYPES,
    AtomColorDirective,
    AtomColorParams,
    AttributeDirective,
    AttributeParams,
    Constraint,
    CyclicConstraint,
    CyclicParams,
    DecoratorSet,
    Directive,
    EdgeColorDirective,
    EdgeColorParams,
    FieldGroupParams,
    FlagDirective,
    GroupConstraint,
    HideAtomDirective,
    HideAtomParams,
    HideFieldDirective,
    HideFieldParams,
    IconDirective,
    IconParams,
    InferredEdgeDirective,
    InferredEdgeParams,
    OrientationConstraint,
    OrientationParams,
    ProjectionDirective,
    ProjectionParams,
    SelectorGroupParams,
    SizeDirective,
    SizeParams,
)
from .validation import check_params


class DecoratorSetBuilder:
    """Accumulates constraints and directives; ``build()`` freezes them."""

    def __init__(self):
        self._constraints: list[Constraint] = []
        self._directives: list[Directive] = []

    def add(self, record: Constraint | Directive) -> "DecoratorSetBuilder":
        """Append an already-built constraint or directive record."""
        if record.kind in CONSTRAINT_TYPES:
            self._constraints.append(record)
        else:
            self._directives.append(record)
        return self

    def extend(self, decorators: DecoratorSet) -> "DecoratorSetBuilder":
        """Append every record of an existing decorator set."""
        self._constraints.extend(decorators.constraints)
        self._directives.extend(decorators.directives)
        return self

    def orientation(self, selector: str, directions: list[str]) -> "DecoratorSetBuilder":
        self._constraints.append(OrientationConstraint(
            orientation=OrientationParams(selector=selector, directions=list(directions))
        ))
        return self

    def cyclic(self, selector: str, direction: str) -> "DecoratorSetBuilder":
        self._constraints.append(CyclicConstraint(
            cyclic=CyclicParams(selector=selector, direction=direction)
        ))
        return self

    def group_field_based(
        self, field: str, group_on: int, add_to_group: int, selector: str | None = None
    ) -> "DecoratorSetBuilder":
        self._constraints.append(GroupConstraint(group=FieldGroupParams(
            field=field, group_on=group_on, add_to_group=add_to_group, selector=selector
        )))
        return self

    def group_selector_based(self, selector: str, name: str) -> "DecoratorSetBuilder":
        self._constraints.append(GroupConstraint(
            group=SelectorGroupParams(selector=selector, name=name)
        ))
        return self

    def atom_color(self, selector: str, value: str) -> "DecoratorSetBuilder":
        self._directives.append(AtomColorDirective(
            atom_color=AtomColorParams(selector=selector, value=value)
        ))
        return self

    def edge_color(self, field: str, value: str, selector: str | None = None) -> "DecoratorSetBuilder":
        self._directives.append(EdgeColorDirective(
            edge_color=EdgeColorParams(field=field, value=value, selector=selector)
        ))
        return self

    def size(self, selector: str, height: int, width: int) -> "DecoratorSetBuilder":
        self._directives.append(SizeDirective(
            size=SizeParams(selector=selector, height=height, width=width)
        ))
        return self

    def icon(self, selector: str, path: str, show_labels: bool) -> "DecoratorSetBuilder":
        self._directives.append(IconDirective(
            icon=IconParams(selector=selector, path=path, show_labels=show_labels)
        ))
        return self

    def projection(self, sig: str) -> "DecoratorSetBuilder":
        self._directives.append(ProjectionDirective(projection=ProjectionParams(sig=sig)))
        return self

    def attribute(self, field: str, selector: str | None = None) -> "DecoratorSetBuilder":
        self._directives.append(AttributeDirective(
            attribute=AttributeParams(field=field, selector=selector)
        ))
        return self

    def hide_field(self, field: str, selector: str | None = None) -> "DecoratorSetBuilder":
        self._directives.append(HideFieldDirective(
            hide_field=HideFieldParams(field=field, selector=selector)
        ))
        return self

    def hide_atom(self, selector: str) -> "DecoratorSetBuilder":
        self._directives.append(HideAtomDirective(hide_atom=HideAtomParams(selector=selector)))
        return self

    def inferred_edge(self, name: str, selector: str) -> "DecoratorSetBuilder":
        self._directives.append(InferredEdgeDirective(
            inferred_edge=InferredEdgeParams(name=name, selector=selector)
        ))
        return self

    def flag(self, name: str) -> "DecoratorSetBuilder":
        self._directives.append(FlagDirective(flag=name))
        return self

    def build(self) -> DecoratorSet:
        return DecoratorSet(constraints=tuple(self._constraints), directives=tuple(self._directives))


@dataclass
class Annotation:
    """A runtime annotation: a decorator kind plus a loose parameter bag."""
    annotation_type: str
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> str:
        return self.annotation_type


class AnnotationBuilder:
    """Factory methods for individual runtime annotations."""

    @staticmethod
    def orientation(selector: str, directions: list[str]) -> Annotation:
        return Annotation("orientation", {"selector": selector, "directions": list(directions)})

    @staticmethod
    def cyclic(selector: str, direction: str) -> Annotation:
        return Annotation("cyclic", {"selector": selector, "direction": direction})

    @staticmethod
    def group_field_based(
        field: str, group_on: int, add_to_group: int, selector: str | None = None
    ) -> Annotation:
        params = {"field": field, "groupOn": group_on, "addToGroup": add_to_group}
        if selector is not None:
            params["selector"] = selector
        return Annotation("group", params)

    @staticmethod
    def group_selector_based(selector: str, name: str) -> Annotation:
        return Annotation("group", {"selector": selector, "name": name})

    @staticmethod
    def atom_color(selector: str, value: str) -> Annotation:
        return Annotation("atomColor", {"selector": selector, "value": value})

    @staticmethod
    def edge_color(field: str, value: str, selector: str | None = None) -> Annotation:
        params = {"field": field, "value": value}
        if selector is not None:
            params["selector"] = selector
        return Annotation("edgeColor", params)

    @staticmethod
    def size(selector: str, height: int, width: int) -> Annotation:
        return Annotation("size", {"selector": selector, "height": height, "width": width})

    @staticmethod
    def icon(selector: str, path: str, show_labels: bool) -> Annotation:
        return Annotation("icon", {"selector": selector, "path": path, "showLabels": show_labels})

    @staticmethod
    def projection(sig: str) -> Annotation:
        return Annotation("projection", {"sig": sig})

    @staticmethod
    def attribute(field: str, selector: str | None = None) -> Annotation:
        params = {"field": field}
        if selector is not None:
            params["selector"] = selector
        return Annotation("attribute", params)

    @staticmethod
    def inferred_edge(name: str, selector: str) -> Annotation:
        return Annotation("inferredEdge", {"name": name, "selector": selector})

    @staticmethod
    def hide_atom(selector: str) -> Annotation:
        return Annotation("hideAtom", {"selector": selector})

    @staticmethod
    def hide_field(field: str, selector: str | None = None) -> Annotation:
        params = {"field": field}
        if selector is not None:
            params["selector"] = selector
        return Annotation("hideField", params)

    @staticmethod
    def flag(name: str) -> Annotation:
        return Annotation("flag", {"name": name})


def record_from_params(
    kind: str,
    params: dict[str, Any],
    resolve_selector: Callable[[str], str] | None = None,
    validate: bool = True,
) -> Constraint | Directive:
    """Build a constraint or directive record from a kind and its parameters.

    Args:
        kind: Decorator kind in wire casing (e.g. 'atomColor')
        params: Parameters in wire casing
        resolve_selector: Optional rewrite applied to the 'selector' parameter
        validate: Check parameter names against the kind's schema first

    Raises:
        DecoratorValidationError: If parameter names or values are invalid
    """
    if validate:
        check_params(kind, list(params))

    params = dict(params)
    if resolve_selector is not None and isinstance(params.get("selector"), str):
        params["selector"] = resolve_selector(params["selector"])

    record_type = CONSTRAINT_TYPES.get(kind) or DIRECTIVE_TYPES.get(kind)
    if record_type is None:
        raise DecoratorValidationError(kind, f"Unknown decorator kind '{kind}'", provided=list(params))

    payload = params.get("name") if record_type is FlagDirective else params
    try:
        return record_type.model_validate({kind: payload})
    except ValidationError as e:
        raise DecoratorValidationError(
            kind, f"Invalid parameter values for '{kind}': {e}", provided=list(params)
        ) from e
