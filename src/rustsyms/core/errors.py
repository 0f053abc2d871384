"""rustsyms error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Extraction
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Extraction (3xxx)
    EXTRACT_SERIALIZATION_FAILED = 3001
    EXTRACT_GRAMMAR_UNAVAILABLE = 3002


@dataclass(frozen=True, slots=True)
class RustSymsError(Exception):
    """Base error with structured context for JSON responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(RustSymsError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ExtractionError(RustSymsError):
    """Failures that prevent a result from being returned at all.

    Syntax problems in the input are never raised; they are reported as
    diagnostics inside the response.
    """

    @classmethod
    def serialization_failure(cls, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.EXTRACT_SERIALIZATION_FAILED,
            message=f"Failed to serialize extraction result: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def grammar_unavailable(cls, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.EXTRACT_GRAMMAR_UNAVAILABLE,
            message=f"Rust grammar could not be loaded: {reason}",
            details={"reason": reason},
        )

