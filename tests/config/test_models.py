"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- ExtractConfig model
- TelemetryConfig model
- RustSymsConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rustsyms.config.models import (
    ExtractConfig,
    LoggingConfig,
    LogOutputConfig,
    RustSymsConfig,
    TelemetryConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    @pytest.mark.parametrize("destination", ["stderr", "stdout", "/var/log/rustsyms.log"])
    def test_valid_destinations(self, destination: str) -> None:
        """Console streams and absolute paths are accepted."""
        assert LogOutputConfig(destination=destination).destination == destination

    def test_relative_path_fails(self) -> None:
        """Relative path is rejected."""
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/rustsyms.log")


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        """Quiet by default with a single stderr console output."""
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert len(config.outputs) == 1
        assert config.outputs[0].destination == "stderr"

    def test_invalid_level_fails(self) -> None:
        """Unknown level names are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")  # type: ignore[arg-type]


class TestExtractConfig:
    """Tests for ExtractConfig model."""

    def test_defaults(self) -> None:
        """Public-only extraction for the latest edition."""
        config = ExtractConfig()
        assert config.include_private is False
        assert config.edition == "2024"

    @pytest.mark.parametrize("edition", ["2015", "2018", "2021", "2024"])
    def test_known_editions(self, edition: str) -> None:
        """Every released edition is accepted."""
        assert ExtractConfig(edition=edition).edition == edition  # type: ignore[arg-type]

    def test_unknown_edition_fails(self) -> None:
        """Unknown editions are rejected."""
        with pytest.raises(ValidationError):
            ExtractConfig(edition="2027")  # type: ignore[arg-type]


class TestTelemetryConfig:
    """Tests for TelemetryConfig model."""

    def test_defaults(self) -> None:
        """Disabled with no endpoint."""
        config = TelemetryConfig()
        assert config.enabled is False
        assert config.otlp_endpoint is None
        assert config.service_name == "rustsyms"


class TestRustSymsConfig:
    """Tests for the root model."""

    def test_defaults_compose_sections(self) -> None:
        """Root model builds every section from its defaults."""
        config = RustSymsConfig()
        assert config.logging == LoggingConfig()
        assert config.extract == ExtractConfig()
        assert config.telemetry == TelemetryConfig()

    def test_partial_dict_validates(self) -> None:
        """Unspecified sections keep their defaults."""
        config = RustSymsConfig.model_validate({"extract": {"include_private": True}})
        assert config.extract.include_private is True
        assert config.logging.level == "WARNING"


class TestValidators:
    """Input normalization on config fields."""

    @pytest.mark.parametrize(
        ("raw", "level"),
        [("debug", "DEBUG"), ("warn", "WARNING"), ("FATAL", "CRITICAL")],
    )
    def test_level_aliases_normalized(self, raw: str, level: str) -> None:
        """Levels accept any case and the stdlib aliases."""
        assert LoggingConfig(level=raw).level == level  # type: ignore[arg-type]
        assert LogOutputConfig(level=raw).level == level  # type: ignore[arg-type]

    def test_unquoted_yaml_edition_accepted(self) -> None:
        """An integer edition (unquoted in YAML) is read as its string form."""
        assert ExtractConfig.model_validate({"edition": 2021}).edition == "2021"

    def test_endpoint_without_scheme_fails(self) -> None:
        """OTLP endpoints need an http(s) scheme."""
        with pytest.raises(ValidationError):
            TelemetryConfig(otlp_endpoint="localhost:4317")
