"""JSON Schema generation from Pydantic models for spytial documents."""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
from pydantic import BaseModel

from ..models.decorators import DecoratorSet
from ..models.instance import InstanceDocument

logger = logging.getLogger(__name__)

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_BASE_URI = "https://spytial.dev/schemas"


class SchemaGenerator:
    """Generates JSON schemas for the instance and decorator documents."""

    def __init__(self):
        self.schemas: dict[str, dict[str, Any]] = {}

    def generate_all_schemas(self) -> dict[str, dict[str, Any]]:
        """Generate JSON schemas for all spytial document types.

        Returns:
            Dictionary mapping document names to JSON schemas
        """
        self.schemas = {
            "instance": self._model_to_schema(
                InstanceDocument,
                "spytial-instance-v1",
                "JSON Schema for exported atom/relation instance documents",
                f"{SCHEMA_BASE_URI}/instance.v1.schema.json",
            ),
            "decorators": self._model_to_schema(
                DecoratorSet,
                "spytial-decorators-v1",
                "JSON Schema for layout constraint and directive documents",
                f"{SCHEMA_BASE_URI}/decorators.v1.schema.json",
            ),
        }

        logger.info(f"Generated {len(self.schemas)} JSON schemas")
        return self.schemas

    def save_schemas(self, output_dir: Path) -> dict[str, Path]:
        """Save generated schemas to files.

        Args:
            output_dir: Directory to save schema files

        Returns:
            Dictionary mapping schema names to file paths
        """
        if not self.schemas:
            self.generate_all_schemas()

        output_dir.mkdir(parents=True, exist_ok=True)
        schema_files = {}

        for schema_name, schema in self.schemas.items():
            schema_file = output_dir / f"{schema_name}.schema.json"

            with open(schema_file, "w", encoding="utf-8") as f:
                json.dump(schema, f, indent=2, ensure_ascii=False)

            schema_files[schema_name] = schema_file
            logger.debug(f"Saved schema: {schema_file}")

        return schema_files

    def _model_to_schema(
        self,
        model_class: type[BaseModel],
        title: str,
        description: str,
        schema_id: str
    ) -> dict[str, Any]:
        """Convert Pydantic model to JSON schema with document metadata."""
        schema = model_class.model_json_schema(by_alias=True)

        schema["$schema"] = SCHEMA_DIALECT
        schema["$id"] = schema_id
        schema["title"] = title
        schema["description"] = description
        schema["version"] = "1.0"

        return schema

    def get_schema(self, document_type: str) -> dict[str, Any] | None:
        """Get the JSON schema for 'instance' or 'decorators'."""
        if not self.schemas:
            self.generate_all_schemas()
        return self.schemas.get(document_type)

    def validate_schema_compliance(self) -> list[str]:
        """Check generated schemas against the JSON Schema meta-schema.

        Returns:
            List of validation errors (empty if all schemas are valid)
        """
        errors = []

        for schema_name, schema in self.schemas.items():
            try:
                jsonschema.Draft202012Validator.check_schema(schema)
                logger.debug(f"Schema {schema_name} is valid")
            except jsonschema.SchemaError as e:
                error_msg = f"Schema {schema_name} is invalid: {e.message}"
                errors.append(error_msg)
                logger.error(error_msg)

        return errors
