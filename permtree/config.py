"""Configuration loading and validation for permtree."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import BadConfig


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    output: Literal["stderr", "file"] = "stderr"
    file_path: str = "permtree-audit.log"
    rotate_bytes: int = 10_485_760

    @field_validator("rotate_bytes")
    @classmethod
    def validate_rotate_bytes(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("rotate_bytes must be positive")
        return value


class PermissionsConfig(BaseModel):
    """Resource naming and privilege handling settings.

    Passed explicitly to resources, rules and lists so that several
    configurations can coexist in one process.
    """

    model_config = ConfigDict(frozen=True)

    delimiter: str = "::"
    any_matcher: str = "*"
    strict_privileges: bool = False
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("delimiter", "any_matcher")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @model_validator(mode="after")
    def check_matcher(self) -> "PermissionsConfig":
        if self.delimiter in self.any_matcher:
            raise ValueError("any_matcher must not contain the delimiter")
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PermissionsConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise BadConfig(message=str(exc)) from exc


DEFAULT_CONFIG = PermissionsConfig()


def load_config(path: str | Path) -> PermissionsConfig:
    """Load a configuration from a YAML file."""

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise BadConfig(message=f"Failed to read config: {exc}") from exc
    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise BadConfig(message=f"Failed to parse config YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise BadConfig(message="Config YAML must contain a mapping")
    return PermissionsConfig.from_dict(data)
