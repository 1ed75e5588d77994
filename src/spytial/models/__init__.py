"""Pydantic data models for exported instances and layout decorators."""

from spytial.models.decorators import (
    AtomColorDirective,
    AttributeDirective,
    Constraint,
    CyclicConstraint,
    DecoratorSet,
    Directive,
    EdgeColorDirective,
    FlagDirective,
    GroupConstraint,
    HideAtomDirective,
    HideFieldDirective,
    IconDirective,
    InferredEdgeDirective,
    OrientationConstraint,
    ProjectionDirective,
    SizeDirective,
    merge,
)
from spytial.models.instance import Atom, InstanceDocument, InstanceTuple, Relation

__all__ = [
    "Atom",
    "InstanceTuple",
    "Relation",
    "InstanceDocument",
    "DecoratorSet",
    "Constraint",
    "Directive",
    "OrientationConstraint",
    "CyclicConstraint",
    "GroupConstraint",
    "AtomColorDirective",
    "EdgeColorDirective",
    "SizeDirective",
    "IconDirective",
    "ProjectionDirective",
    "AttributeDirective",
    "HideFieldDirective",
    "HideAtomDirective",
    "InferredEdgeDirective",
    "FlagDirective",
    "merge",
]
