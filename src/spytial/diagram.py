"""Assembly of the two renderer inputs: instance JSON and decorator YAML."""

import logging
from dataclasses import dataclass
from typing import Any

from .config import SpytialConfig
from .decorators.context import DecoratorContext, get_default_context
from .export.exporter import Exporter
from .models.decorators import DecoratorSet, merge
from .models.instance import InstanceDocument
from .serialization import to_yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagram:
    """An exported instance with the decorators that lay it out."""
    instance: InstanceDocument
    decorators: DecoratorSet

    def to_payload(self, json_indent: int | None = 2, yaml_indent: int = 2) -> tuple[str, str]:
        """Get ``(instance_json, decorators_yaml)`` as consumed by the renderer."""
        return self.instance.to_json(indent=json_indent), to_yaml(self.decorators, yaml_indent)


def build_diagram(
    value: Any,
    context: DecoratorContext | None = None,
    config: SpytialConfig | None = None,
) -> Diagram:
    """Export a value together with all decorators that apply to it.

    The root's own type decorators and runtime annotations come first,
    followed by the decorators of every nested record type met during the
    walk.
    """
    context = context or get_default_context()
    config = config or SpytialConfig()

    instance, nested = Exporter(config.export, context).export_with_decorators(value)
    decorators = merge(context.collect(value), nested)
    logger.debug(
        f"Built diagram for {type(value).__name__}: {len(decorators.constraints)} constraints, "
        f"{len(decorators.directives)} directives"
    )
    return Diagram(instance, decorators)
