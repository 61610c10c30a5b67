"""Core module exports."""

from itest.core.errors import (
    ConfigError,
    CoverageError,
    ErrorCode,
    ExecutionError,
    InternalError,
    ItestError,
    ResultParseError,
)
from itest.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    notification_sink,
    notify,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "CoverageError",
    "ErrorCode",
    "ExecutionError",
    "InternalError",
    "ItestError",
    "ResultParseError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "notification_sink",
    "notify",
    "set_run_id",
]
