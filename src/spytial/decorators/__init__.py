"""Layout decorators: builders, validation, registries and collection.

The module-level helpers operate on the process default context; pass an
explicit ``context`` to keep registrations isolated.
"""

from typing import Any

from ..models.decorators import DecoratorSet
from .builder import Annotation, AnnotationBuilder, DecoratorSetBuilder, record_from_params
from .context import DecoratorContext, get_default_context, set_default_context
from .registry import InstanceStore, TypeRegistry, declared_decorators
from .selectors import SELF, Selector, SelfRef
from .validation import (
    ParamSchema,
    ParamSet,
    ParamValidationResult,
    check_params,
    get_constraint_params,
    get_directive_params,
    get_param_schema,
    validate_params,
)


def _context(context: DecoratorContext | None) -> DecoratorContext:
    return context if context is not None else get_default_context()


def annotate_instance(instance: Any, annotation: Annotation, context: DecoratorContext | None = None) -> None:
    _context(context).annotate(instance, annotation)


def collect_decorators_for_instance(instance: Any, context: DecoratorContext | None = None) -> DecoratorSet:
    return _context(context).collect(instance)


def collect_instance_only_decorators(instance: Any, context: DecoratorContext | None = None) -> DecoratorSet:
    return _context(context).collect_instance_only(instance)


def register_type_decorators(
    type_name: str, decorators: DecoratorSet, context: DecoratorContext | None = None
) -> bool:
    return _context(context).register_type_decorators(type_name, decorators)


def get_type_decorators(type_name: str, context: DecoratorContext | None = None) -> DecoratorSet | None:
    return _context(context).get_type_decorators(type_name)


def register_types(*classes: type, context: DecoratorContext | None = None) -> None:
    _context(context).register_types(*classes)


__all__ = [
    "Annotation",
    "AnnotationBuilder",
    "DecoratorContext",
    "DecoratorSetBuilder",
    "InstanceStore",
    "ParamSchema",
    "ParamSet",
    "ParamValidationResult",
    "SELF",
    "Selector",
    "SelfRef",
    "TypeRegistry",
    "annotate_instance",
    "check_params",
    "collect_decorators_for_instance",
    "collect_instance_only_decorators",
    "declared_decorators",
    "get_constraint_params",
    "get_default_context",
    "get_directive_params",
    "get_param_schema",
    "get_type_decorators",
    "record_from_params",
    "register_type_decorators",
    "register_types",
    "set_default_context",
    "validate_params",
]
