"""Core module exports."""

from rustsyms.core.errors import (
    ConfigError,
    ErrorCode,
    ExtractionError,
    RustSymsError,
)
from rustsyms.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    set_request_id,
)
from rustsyms.core.telemetry import init_telemetry, shutdown_telemetry, traced

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "ExtractionError",
    "RustSymsError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "set_request_id",
    # Telemetry
    "init_telemetry",
    "shutdown_telemetry",
    "traced",
]
