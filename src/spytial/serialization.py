"""Text serialization of decorator sets (YAML) and instance documents (JSON)."""

import logging
from typing import Any

import yaml
from pydantic import ValidationError

from .decorators.builder import record_from_params
from .decorators.context import DecoratorContext, get_default_context
from .errors import DecoratorValidationError
from .models.decorators import Constraint, DecoratorSet, Directive
from .models.instance import InstanceDocument

logger = logging.getLogger(__name__)


def to_yaml(decorators: DecoratorSet, indent: int = 2) -> str:
    """Serialize decorators to the YAML document read by the renderer."""
    return yaml.safe_dump(
        decorators.to_dict(),
        sort_keys=False,
        default_flow_style=False,
        indent=indent,
        allow_unicode=True,
    )


def record_params(kind: str, payload: Any) -> dict[str, Any]:
    """Parameters of one single-key document record.

    Raises:
        DecoratorValidationError: If the payload is not a parameter mapping
    """
    if kind == "flag" and isinstance(payload, str):
        return {"name": payload}
    if isinstance(payload, dict):
        return payload
    raise DecoratorValidationError(kind, f"Parameters of '{kind}' must be a mapping")


def _section_records(section: str, records: Any) -> list[Constraint | Directive]:
    if records is None:
        return []
    if not isinstance(records, list):
        raise DecoratorValidationError("document", f"'{section}' must be a list")

    built = []
    for record in records:
        if not isinstance(record, dict) or len(record) != 1:
            raise DecoratorValidationError(
                "document", f"Each entry of '{section}' must be a mapping with exactly one key"
            )
        kind, payload = next(iter(record.items()))
        built.append(record_from_params(str(kind), record_params(str(kind), payload)))
    return built


def from_yaml(text: str) -> DecoratorSet:
    """Parse a YAML decorator document.

    Every record is checked against the parameter sets of its kind, so errors
    name the missing, unknown or tried parameters.

    Raises:
        DecoratorValidationError: If the document does not describe valid decorators
        yaml.YAMLError: If the text is not valid YAML
    """
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise DecoratorValidationError(
            "document", f"Decorator document must be a mapping, got {type(data).__name__}"
        )

    unknown = [key for key in data if key not in ("constraints", "directives")]
    if unknown:
        raise DecoratorValidationError(
            "document",
            f"Unknown top-level keys in decorator document: [{', '.join(map(str, unknown))}]",
            unknown=[str(key) for key in unknown],
        )

    constraints = _section_records("constraints", data.get("constraints"))
    directives = _section_records("directives", data.get("directives"))
    try:
        return DecoratorSet(constraints=tuple(constraints), directives=tuple(directives))
    except ValidationError as e:
        raise DecoratorValidationError("document", f"Invalid decorator document: {e}") from e


def to_yaml_for_type(cls: type, context: DecoratorContext | None = None, indent: int = 2) -> str:
    """YAML of a class's declared decorators."""
    context = context or get_default_context()
    return to_yaml(context.type_decorators(cls), indent)


def to_yaml_for_instance(instance: Any, context: DecoratorContext | None = None, indent: int = 2) -> str:
    """YAML of an instance's type decorators followed by its runtime annotations."""
    context = context or get_default_context()
    return to_yaml(context.collect(instance), indent)


def instance_to_json(document: InstanceDocument, indent: int | None = 2) -> str:
    return document.to_json(indent=indent)


def instance_from_json(text: str) -> InstanceDocument:
    return InstanceDocument.model_validate_json(text)
