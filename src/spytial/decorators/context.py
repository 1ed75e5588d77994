"""Decorator context: owns the type registry and the instance store."""

import logging
import threading
from typing import Any

from ..config import AnnotationConfig
from ..models.decorators import DecoratorSet, merge
from .builder import Annotation, record_from_params
from .registry import InstanceStore, TypeRegistry
from .selectors import Selector
from .validation import get_param_schema

logger = logging.getLogger(__name__)


class DecoratorContext:
    """Explicit home for type-level and instance-level decorators.

    Exports and collections that share a context see the same registrations.
    Tests and independent callers can create their own context instead of
    using the process default.
    """

    def __init__(self, config: AnnotationConfig | None = None):
        self.config = config or AnnotationConfig()
        self.types = TypeRegistry()
        self.instances = InstanceStore(self.config.placeholder_prefix)

    def register_type_decorators(self, type_name: str, decorators: DecoratorSet) -> bool:
        return self.types.register(type_name, decorators)

    def get_type_decorators(self, type_name: str) -> DecoratorSet | None:
        return self.types.get(type_name)

    def register_types(self, *classes: type) -> None:
        self.types.register_types(*classes)

    def type_decorators(self, cls: type) -> DecoratorSet:
        """Decorators of a class, registering its declaration on first use."""
        return self.types.ensure_registered(cls) or DecoratorSet()

    def annotate(self, instance: Any, annotation: Annotation) -> None:
        """Attach one runtime annotation to an instance.

        Unknown annotation kinds are ignored. Selectors referring to ``self``
        are rewritten to this instance's placeholder identifier.

        Raises:
            DecoratorValidationError: If a known kind has invalid parameters
        """
        kind = annotation.annotation_type
        if get_param_schema(kind) is None:
            logger.debug(f"Ignoring unknown annotation kind '{kind}' on {type(instance).__name__}")
            return

        def resolve(text: str) -> str:
            selector = Selector.parse(text, self.config.self_token)
            if not selector.has_self_ref:
                return text
            return selector.resolve(self.instances.placeholder_for(instance))

        record = record_from_params(
            kind, annotation.params, resolve, validate=self.config.validate_params
        )
        self.instances.add(instance, record)
        logger.debug(f"Annotated {type(instance).__name__} with '{kind}'")

    def collect(self, instance: Any) -> DecoratorSet:
        """Type-level decorators of the instance's class followed by its own."""
        return merge(self.type_decorators(type(instance)), self.collect_instance_only(instance))

    def collect_instance_only(self, instance: Any) -> DecoratorSet:
        return self.instances.get(instance) or DecoratorSet()


_default_context: DecoratorContext | None = None
_default_lock = threading.Lock()


def get_default_context() -> DecoratorContext:
    """Get the process-wide decorator context."""
    global _default_context
    with _default_lock:
        if _default_context is None:
            _default_context = DecoratorContext()
        return _default_context


def set_default_context(context: DecoratorContext | None) -> None:
    """Replace the process-wide context; None resets it on next use."""
    global _default_context
    with _default_lock:
        _default_context = context
