"""Load the harness options from a JSON file and the command line."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from harness.core.errors import ConfigurationError

OPTION_NAMES = (
    "context.data",
    "context.output",
    "context.reference",
    "context.application-path",
    "persistent-storage",
    "junit-xml-test-report",
    "log-level",
)


class HarnessConfiguration(BaseModel):
    """Options consumed once when the harness is constructed."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    context_data: Optional[str] = Field(default=None, alias="context.data")
    context_output: Optional[str] = Field(default=None, alias="context.output")
    context_reference: Optional[str] = Field(default=None, alias="context.reference")
    context_application_path: Optional[str] = Field(default=None, alias="context.application-path")
    persistent_storage: Optional[str] = Field(default=None, alias="persistent-storage")
    junit_xml_test_report: Optional[str] = Field(default=None, alias="junit-xml-test-report")
    log_level: str = Field(default="WARNING", alias="log-level")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value}")
        return level

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "HarnessConfiguration":
        try:
            return cls.model_validate(dict(values))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid harness configuration: {exc}") from exc


def load_configuration(
    config_file: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> HarnessConfiguration:
    """Merge the options of *config_file* with *overrides*, overrides winning.

    ``None`` values in *overrides* are treated as absent.
    """
    values: Dict[str, Any] = {}
    if config_file is not None:
        try:
            payload = _read_json(config_file)
        except ValueError as exc:
            raise ConfigurationError(f"Configuration file {config_file} is not valid JSON: {exc}") from exc
        if payload is None:
            raise ConfigurationError(f"Configuration file {config_file} not found")
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Configuration file {config_file} must contain a JSON object")
        values.update(payload)
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value
    return HarnessConfiguration.from_mapping(values)


def _read_json(path: Path) -> Any:
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as file:
        return json.load(file)
