"""Config module exports."""

from rustsyms.config.loader import RustSymsSettings, load_config
from rustsyms.config.models import (
    ExtractConfig,
    LoggingConfig,
    LogOutputConfig,
    RustSymsConfig,
    TelemetryConfig,
)

__all__ = [
    "load_config",
    "RustSymsConfig",
    "RustSymsSettings",
    "ExtractConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "TelemetryConfig",
]
