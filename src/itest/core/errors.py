"""itest error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 7xxx: Test (execution, results, coverage)
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Test (7xxx)
    EXECUTION_TIMEOUT = 7001
    UNSUPPORTED_SCHEME = 7002
    RESULT_PARSE_ERROR = 7003
    COVERAGE_DOWNLOAD_FAILED = 7004
    COVERAGE_PARSE_ERROR = 7005

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True)
class ItestError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'EXECUTION_TIMEOUT')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ItestError):
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


class ExecutionError(ItestError):
    """Remote command execution errors."""

    @classmethod
    def timeout(cls, command: str, timeout_sec: float) -> "ExecutionError":
        return cls(
            code=ErrorCode.EXECUTION_TIMEOUT,
            message=f"Command timed out after {timeout_sec}s",
            retryable=True,
            details={"command": command, "timeout_sec": timeout_sec},
        )

    @classmethod
    def unsupported_scheme(cls, scheme: str) -> "ExecutionError":
        return cls(
            code=ErrorCode.UNSUPPORTED_SCHEME,
            message=f"Unsupported test suite scheme: {scheme}",
            details={"scheme": scheme},
        )


class ResultParseError(ItestError):
    """Malformed test result document."""

    @classmethod
    def malformed(cls, reason: str) -> "ResultParseError":
        return cls(
            code=ErrorCode.RESULT_PARSE_ERROR,
            message=f"Failed to parse test results: {reason}",
            details={"reason": reason},
        )


class CoverageError(ItestError):
    """Coverage archive download or decode errors."""

    @classmethod
    def download_failed(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_DOWNLOAD_FAILED,
            message=f"Failed to download code coverage results: {path} - {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def parse_error(cls, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_PARSE_ERROR,
            message=f"Failed to parse code coverage results: {reason}",
            details={"reason": reason},
        )


class InternalError(ItestError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
