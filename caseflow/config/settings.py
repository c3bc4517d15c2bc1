"""Reporting settings and loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from caseflow.errors import ConfigurationError, ErrorContext

REPORTER_NAMES = ("console", "junit")


class ReportingSettings(BaseSettings):
    """Configuration for the caseflow reporters.

    Attributes:
        reporters: Reporters to build, in broadcast order.
        report_dir: Output directory of the JUnit XML reporter.
        indent_size: Spaces per indentation level of the console reporter.
        no_color: Disable colors on the console.
        hostname: Value of the JUnit ``hostname`` attribute.
    """

    model_config = SettingsConfigDict(
        env_prefix="CASEFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    reporters: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["console"])
    report_dir: str = "reports"
    indent_size: int = 4
    no_color: bool = False
    hostname: str = "localhost"

    @field_validator("reporters", mode="before")
    @classmethod
    def validate_reporters(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            v = [name.strip() for name in v.split(",") if name.strip()]
        invalid = set(v) - set(REPORTER_NAMES)
        if invalid:
            raise ValueError(
                f"Invalid reporters: {sorted(invalid)}. Valid: {list(REPORTER_NAMES)}"
            )
        return list(v)

    @field_validator("indent_size")
    @classmethod
    def validate_indent_size(cls, v: int) -> int:
        if v < 0:
            raise ValueError("indent_size must be zero or positive")
        return v


def load_settings(config_path: str | Path | None = None) -> ReportingSettings:
    """Load reporting settings from a YAML file and the environment.

    Priority: env vars > config file > defaults

    Raises:
        ConfigurationError: If the file cannot be parsed or a value is invalid.
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Cannot parse {config_path}: {e}",
                    context=ErrorContext(path=str(config_path)),
                    cause=e,
                ) from e
            if not isinstance(config_data, dict):
                raise ConfigurationError(
                    f"{config_path} must contain a mapping, got {type(config_data).__name__}",
                    context=ErrorContext(path=str(config_path)),
                )

    try:
        config_data.update(_get_env_overrides())
    except ValueError as e:
        raise ConfigurationError(f"Invalid CASEFLOW_* environment variable: {e}", cause=e) from e

    try:
        return ReportingSettings(**config_data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid reporting configuration: {e}",
            context=ErrorContext(path=str(config_path) if config_path else None),
            cause=e,
        ) from e


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_mappings = {
        "CASEFLOW_REPORTERS": "reporters",
        "CASEFLOW_REPORT_DIR": "report_dir",
        "CASEFLOW_INDENT_SIZE": ("indent_size", int),
        "CASEFLOW_NO_COLOR": ("no_color", lambda x: x.lower() in ("true", "1", "yes")),
        "CASEFLOW_HOSTNAME": "hostname",
    }

    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            if isinstance(config_key, tuple):
                key, converter = config_key
                overrides[key] = converter(value)
            else:
                overrides[config_key] = value

    return overrides
