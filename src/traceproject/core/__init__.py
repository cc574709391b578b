"""Core module exports."""

from traceproject.core.errors import (
    ConfigError,
    ErrorCode,
    ScanError,
    TraceError,
    TraceProjectError,
    VirtualFsError,
)
from traceproject.core.logging import configure_logging, get_log_file_path, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "ScanError",
    "TraceError",
    "TraceProjectError",
    "VirtualFsError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
