"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (RUSTSYMS__SECTION__KEY)
3. Explicit YAML file (--config PATH)
4. Global YAML (~/.config/rustsyms/config.yaml)
5. Built-in defaults (this file)

Examples:
    RUSTSYMS__LOGGING__LEVEL=DEBUG
    RUSTSYMS__EXTRACT__INCLUDE_PRIVATE=true
    RUSTSYMS__TELEMETRY__ENABLED=true
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
RustEdition = Literal["2015", "2018", "2021", "2024"]

_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _normalize_level(value: Any) -> Any:
    """Accept any case and the stdlib aliases WARN / FATAL."""
    if isinstance(value, str):
        upper = value.strip().upper()
        return _LEVEL_ALIASES.get(upper, upper)
    return value


class LogOutputConfig(BaseModel):
    """Single logging output: where events go, how they render, and from which level."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from LoggingConfig.level if None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return _normalize_level(v)

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        RUSTSYMS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs one event per extracted file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return _normalize_level(v)


class ExtractConfig(BaseModel):
    """Symbol extraction defaults.

    Env vars:
        RUSTSYMS__EXTRACT__INCLUDE_PRIVATE: Include items without a pub modifier
        RUSTSYMS__EXTRACT__EDITION: Rust edition passed to the parser
    """

    include_private: bool = Field(
        default=False,
        description="Include private items and module references in the output.",
    )
    edition: RustEdition = Field(
        default="2024",
        description="Rust edition. The tree-sitter grammar accepts all editions; "
        "the value is recorded for the parser interface.",
    )

    @field_validator("edition", mode="before")
    @classmethod
    def coerce_edition(cls, v: Any) -> Any:
        # YAML reads an unquoted `edition: 2021` as an int
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class TelemetryConfig(BaseModel):
    """OpenTelemetry configuration.

    Env vars:
        RUSTSYMS__TELEMETRY__ENABLED: Enable/disable telemetry
        RUSTSYMS__TELEMETRY__OTLP_ENDPOINT: OTLP collector endpoint
        RUSTSYMS__TELEMETRY__SERVICE_NAME: Service name for traces

    Note: Also respects standard OTEL_* env vars when enabled.
    """

    enabled: bool = Field(
        default=False,
        description="Enable OpenTelemetry. Set to true and configure endpoint to activate.",
    )
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP collector endpoint (e.g., http://localhost:4317).",
    )
    service_name: str = Field(
        default="rustsyms",
        description="Service name for traces.",
    )

    @field_validator("otlp_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"OTLP endpoint must start with http:// or https://: {v}")
        return v


class RustSymsConfig(BaseModel):
    """Root configuration for rustsyms."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    extract: ExtractConfig = Field(default_factory=ExtractConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
