"""spytial - Relational instance export with layout decorators.

spytial walks in-memory Python values into a normalized atom/relation
instance and collects the layout constraints and visual directives that
tell a graph renderer how to draw it.
"""

__version__ = "0.1.0"
__author__ = "spytial"
__description__ = "Relational instance export with layout decorators"

from spytial.config import SpytialConfig, load_config
from spytial.decorators import (
    Annotation,
    AnnotationBuilder,
    DecoratorContext,
    DecoratorSetBuilder,
    annotate_instance,
    collect_decorators_for_instance,
    collect_instance_only_decorators,
    get_default_context,
    get_type_decorators,
    register_type_decorators,
    register_types,
)
from spytial.diagram import Diagram, build_diagram
from spytial.errors import (
    DecoratorValidationError,
    SpytialError,
    TraversalContractError,
    UnsupportedValueError,
)
from spytial.export import Exporter, export, export_with_decorators, variant_of
from spytial.models import Atom, DecoratorSet, InstanceDocument, Relation, merge
from spytial.serialization import to_yaml, to_yaml_for_instance, to_yaml_for_type

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "SpytialConfig",
    "load_config",
    "Annotation",
    "AnnotationBuilder",
    "DecoratorContext",
    "DecoratorSetBuilder",
    "annotate_instance",
    "collect_decorators_for_instance",
    "collect_instance_only_decorators",
    "get_default_context",
    "get_type_decorators",
    "register_type_decorators",
    "register_types",
    "Diagram",
    "build_diagram",
    "SpytialError",
    "TraversalContractError",
    "UnsupportedValueError",
    "DecoratorValidationError",
    "Exporter",
    "export",
    "export_with_decorators",
    "variant_of",
    "Atom",
    "Relation",
    "InstanceDocument",
    "DecoratorSet",
    "merge",
    "to_yaml",
    "to_yaml_for_type",
    "to_yaml_for_instance",
]
