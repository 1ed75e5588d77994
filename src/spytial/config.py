"""Configuration management for spytial using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".spytial.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


class ExportConfig(BaseModel):
    """Structural export configuration section."""
    id_prefix: str = Field(alias="idPrefix", default="atom")
    variant_field_prefix: str = Field(alias="variantFieldPrefix", default="")
    include_private_attributes: bool = Field(alias="includePrivateAttributes", default=False)
    max_label_length: int = Field(alias="maxLabelLength", default=0)

    @field_validator("id_prefix")
    @classmethod
    def validate_id_prefix(cls, v):
        if not v or not v.isidentifier():
            raise ValueError(f"id_prefix must be a non-empty identifier, got: {v!r}")
        return v

    @field_validator("max_label_length")
    @classmethod
    def validate_max_label_length(cls, v):
        if v < 0:
            raise ValueError("max_label_length must be >= 0")
        return v

    model_config = ConfigDict(populate_by_name=True)


class AnnotationConfig(BaseModel):
    """Runtime instance annotation configuration section."""
    self_token: str = Field(alias="selfToken", default="self")
    placeholder_prefix: str = Field(alias="placeholderPrefix", default="obj_")
    validate_params: bool = Field(alias="validateParams", default=True)

    @field_validator("self_token")
    @classmethod
    def validate_self_token(cls, v):
        if not v or not v.isidentifier():
            raise ValueError(f"self_token must be a non-empty identifier, got: {v!r}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output rendering configuration section."""
    yaml_indent: int = Field(alias="yamlIndent", default=2)
    json_indent: int = Field(alias="jsonIndent", default=2)

    @field_validator("yaml_indent")
    @classmethod
    def validate_yaml_indent(cls, v):
        if not (1 <= v <= 8):
            raise ValueError(f"yaml_indent must be between 1-8, got: {v}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class SpytialConfig(BaseModel):
    """Complete spytial configuration model."""
    export: ExportConfig = Field(default_factory=ExportConfig)
    annotations: AnnotationConfig = Field(default_factory=AnnotationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> SpytialConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .spytial.json

    Returns:
        SpytialConfig: Loaded and validated configuration

    Raises:
        ValueError: If the configuration file is not valid JSON or not a
                    valid configuration
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return SpytialConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except ValidationError as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e

    return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .spytial.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> SpytialConfig:
    """Create default configuration."""
    return SpytialConfig()


def configure_logging(level: LogLevel | str) -> None:
    """Configure root logging from a config log level."""
    value = level.value if isinstance(level, LogLevel) else level
    logging.basicConfig(
        level=_LOG_LEVELS.get(value, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
