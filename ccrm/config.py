"""
Application configuration.

An ``AppConfig`` is built once at startup and handed to the services that
need it; nothing reads configuration from module-level state.
"""

import json
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .core.exceptions import ConfigurationError

DEFAULT_MAX_CREDITS = 24


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    app_name: str = "Campus Course Registration Management"
    app_version: str = "1.0.0"
    data_path: str = "data/"
    backup_path: str = "backup/"
    max_credits: int = Field(default=DEFAULT_MAX_CREDITS, ge=1)
    date_format: str = "dd-MM-yyyy"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def strftime_format(self) -> str:
        """``date_format`` translated to a strftime pattern."""
        return (self.date_format
                .replace("yyyy", "%Y")
                .replace("MM", "%m")
                .replace("dd", "%d"))

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "AppConfig":
        try:
            return cls(**values)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s)",
                error_code="INVALID_CONFIG",
                details={'errors': [err['msg'] for err in e.errors()]}
            )

    @classmethod
    def load(cls, path: str) -> "AppConfig":
        """Load configuration from a JSON file."""
        try:
            with open(path, 'r') as f:
                values = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}")
        if not isinstance(values, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a JSON object")
        return cls.from_dict(values)
