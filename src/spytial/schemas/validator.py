"""Document validation against the spytial JSON schemas."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from .generator import SchemaGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaIssue:
    """One schema violation at a JSON path."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class DocumentValidator:
    """Validates instance and decorator documents against JSON schemas."""

    def __init__(self, schemas: dict[str, dict[str, Any]] | None = None):
        self.schemas = schemas or SchemaGenerator().generate_all_schemas()

    def validate_data(self, data: Any, document_type: str) -> list[SchemaIssue]:
        """Validate document data against the schema of its type.

        Args:
            data: Parsed document
            document_type: 'instance' or 'decorators'

        Returns:
            List of issues, empty if valid
        """
        schema = self.schemas.get(document_type)
        if not schema:
            return [SchemaIssue("$", f"No schema available for document type: {document_type}")]

        validator = jsonschema.Draft202012Validator(schema)
        issues = [
            SchemaIssue(error.json_path, error.message)
            for error in sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
        ]
        if issues:
            logger.debug(f"{document_type} document has {len(issues)} schema issues")
        return issues

    def validate_file(self, path: Path, document_type: str) -> list[SchemaIssue]:
        """Validate a JSON or YAML document file."""
        if not path.exists():
            return [SchemaIssue(str(path), "File does not exist")]

        try:
            data = load_document(path)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            return [SchemaIssue(str(path), f"Failed to parse file: {e}")]

        return self.validate_data(data, document_type)

    def is_valid(self, data: Any, document_type: str) -> bool:
        return not self.validate_data(data, document_type)


def load_document(path: Path) -> Any:
    """Load a JSON document, or YAML for .yaml/.yml files."""
    with open(path, encoding="utf-8") as f:
        if path.suffix in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)
