"""JSON Schema generation and validation for spytial documents.

This module provides utilities for generating JSON schemas from Pydantic models
and validating instance and decorator documents against those schemas.
"""

from .generator import SchemaGenerator
from .validator import DocumentValidator, SchemaIssue

__all__ = [
    "SchemaGenerator",
    "DocumentValidator",
    "SchemaIssue",
]
