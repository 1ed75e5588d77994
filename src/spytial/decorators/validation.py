"""Parameter schemas for constraint and directive kinds.

Every kind declares one or more parameter sets. Provided parameter names are
valid when they match at least one set: all required names present and no
name outside required + optional.
"""

import logging
from dataclasses import dataclass, field

from ..errors import DecoratorValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParamSet:
    """One accepted shape of parameters."""
    required: tuple[str, ...]
    optional: tuple[str, ...] = ()

    @property
    def all_valid(self) -> tuple[str, ...]:
        return self.required + self.optional

    def describe(self) -> str:
        return f"required: [{', '.join(self.required)}], optional: [{', '.join(self.optional)}]"


@dataclass(frozen=True)
class ParamSchema:
    """Parameter definition for a constraint or directive kind."""
    sets: tuple[ParamSet, ...]

    @property
    def is_multiple(self) -> bool:
        return len(self.sets) > 1

    @classmethod
    def single(cls, required: list[str], optional: list[str] | None = None) -> "ParamSchema":
        return cls((ParamSet(tuple(required), tuple(optional or ())),))

    @classmethod
    def multiple(cls, *sets: ParamSet) -> "ParamSchema":
        return cls(tuple(sets))


@dataclass
class ParamValidationResult:
    """Outcome of validating provided parameter names against a schema."""
    annotation_type: str
    provided: list[str]
    missing: list[str] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)
    tried: list[str] = field(default_factory=list)
    message: str = ""

    @property
    def valid(self) -> bool:
        return not self.message

    def to_error(self) -> DecoratorValidationError:
        return DecoratorValidationError(
            self.annotation_type,
            self.message,
            missing=self.missing,
            unknown=self.unknown,
            tried=self.tried,
            provided=self.provided,
        )


def get_constraint_params() -> dict[str, ParamSchema]:
    """Definition of valid parameters for each constraint kind."""
    return {
        "orientation": ParamSchema.single(["selector", "directions"]),
        "cyclic": ParamSchema.single(["selector", "direction"]),
        "group": ParamSchema.multiple(
            ParamSet(("field", "groupOn", "addToGroup"), ("selector",)),
            ParamSet(("selector", "name")),
        ),
    }


def get_directive_params() -> dict[str, ParamSchema]:
    """Definition of valid parameters for each directive kind."""
    return {
        "atomColor": ParamSchema.single(["selector", "value"]),
        "size": ParamSchema.single(["selector", "height", "width"]),
        "icon": ParamSchema.single(["selector", "path", "showLabels"]),
        "edgeColor": ParamSchema.single(["field", "value"], ["selector"]),
        "projection": ParamSchema.single(["sig"]),
        "attribute": ParamSchema.single(["field"], ["selector"]),
        "hideField": ParamSchema.single(["field"], ["selector"]),
        "hideAtom": ParamSchema.single(["selector"]),
        "inferredEdge": ParamSchema.single(["name", "selector"]),
        "flag": ParamSchema.single(["name"]),
    }


def get_param_schema(annotation_type: str) -> ParamSchema | None:
    """Look up the schema of a constraint or directive kind."""
    schema = get_constraint_params().get(annotation_type)
    if schema is None:
        schema = get_directive_params().get(annotation_type)
    return schema


def is_constraint_kind(annotation_type: str) -> bool:
    return annotation_type in get_constraint_params()


def is_directive_kind(annotation_type: str) -> bool:
    return annotation_type in get_directive_params()


def _check_param_set(
    annotation_type: str, provided: list[str], param_set: ParamSet
) -> ParamValidationResult:
    result = ParamValidationResult(annotation_type, list(provided))

    result.missing = [p for p in param_set.required if p not in provided]
    if result.missing:
        result.message = (
            f"Missing required parameters for '{annotation_type}': "
            f"[{', '.join(result.missing)}]"
        )
        return result

    result.unknown = [p for p in provided if p not in param_set.all_valid]
    if result.unknown:
        result.message = (
            f"Unknown parameters for '{annotation_type}': [{', '.join(result.unknown)}]. "
            f"Valid parameters: [{', '.join(param_set.all_valid)}]"
        )

    return result


def validate_params(
    annotation_type: str, provided: list[str], param_def: ParamSchema
) -> ParamValidationResult:
    """Validate provided parameter names against a schema.

    Args:
        annotation_type: Kind name used in messages (e.g. 'orientation')
        provided: Parameter names supplied by the caller
        param_def: Schema to validate against

    Returns:
        ParamValidationResult; ``valid`` is False when no parameter set matched
    """
    if not param_def.is_multiple:
        return _check_param_set(annotation_type, provided, param_def.sets[0])

    for param_set in param_def.sets:
        result = _check_param_set(annotation_type, provided, param_set)
        if result.valid:
            return result

    tried = [f"Set {i}: {s.describe()}" for i, s in enumerate(param_def.sets, 1)]
    return ParamValidationResult(
        annotation_type,
        list(provided),
        tried=tried,
        message=(
            f"No valid parameter set found for '{annotation_type}'. "
            f"Expected one of: {' OR '.join(tried)}. Provided: [{', '.join(provided)}]"
        ),
    )


def check_params(annotation_type: str, provided: list[str]) -> None:
    """Validate parameters of a known kind, raising on failure.

    Raises:
        DecoratorValidationError: If the kind is unknown or no parameter set matches
    """
    schema = get_param_schema(annotation_type)
    if schema is None:
        raise DecoratorValidationError(
            annotation_type,
            f"Unknown decorator kind '{annotation_type}'",
            provided=list(provided),
        )

    result = validate_params(annotation_type, provided, schema)
    if not result.valid:
        logger.debug(f"Parameter validation failed: {result.message}")
        raise result.to_error()
