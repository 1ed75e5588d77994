"""Error types raised by spytial.

Traversal contract violations are fatal for the export that raised them.
Decorator validation errors carry enough structure for callers to report
exactly which parameters were wrong.
"""

from typing import Any


class SpytialError(Exception):
    """Base class for all spytial errors."""


class TraversalContractError(SpytialError):
    """A structural emission sequence did not match its declared shape.

    Raised for a map value without a preceding key, a dangling key when a map
    ends, use of an emitter after it ended, or rows of different arity under
    one relation name. The export is aborted because the output can no longer
    be trusted.
    """


class UnsupportedValueError(SpytialError):
    """A value has no shape the exporter knows how to describe."""

    def __init__(self, value: Any):
        self.value_type = type(value).__name__
        super().__init__(f"Cannot describe value of type '{self.value_type}'")


class DecoratorValidationError(SpytialError):
    """Decorator parameters did not match the schema of their kind."""

    def __init__(
        self,
        annotation_type: str,
        message: str,
        missing: list[str] | None = None,
        unknown: list[str] | None = None,
        tried: list[str] | None = None,
        provided: list[str] | None = None,
    ):
        self.annotation_type = annotation_type
        self.missing = missing or []
        self.unknown = unknown or []
        self.tried = tried or []
        self.provided = provided or []
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "annotation_type": self.annotation_type,
            "message": str(self),
            "missing": self.missing,
            "unknown": self.unknown,
            "tried": self.tried,
            "provided": self.provided,
        }
