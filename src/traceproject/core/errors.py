"""traceproject error types with typed error codes.

Error code ranges:
- 1xxx: Virtual filesystem
- 2xxx: Config
- 3xxx: Scan
- 4xxx: Trace
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Virtual filesystem (1xxx)
    FILE_NOT_FOUND = 1001
    UNSUPPORTED_OPERATION = 1002
    NOT_A_DIRECTORY = 1003
    PERMISSION_DENIED = 1004

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Scan (3xxx)
    SCAN_FAILED = 3001

    # Trace (4xxx)
    TRACE_LOAD_FAILED = 4001
    TRACE_EMPTY = 4002


@dataclass(frozen=True, slots=True)
class TraceProjectError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'FILE_NOT_FOUND')."""
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


class VirtualFsError(TraceProjectError):
    """Virtual filesystem errors."""

    @classmethod
    def file_not_found(cls, path: str) -> "VirtualFsError":
        return cls(
            code=ErrorCode.FILE_NOT_FOUND,
            message=f"File not found: {path}",
            details={"path": path},
        )

    @classmethod
    def unsupported_operation(cls, operation: str, fs_name: str) -> "VirtualFsError":
        return cls(
            code=ErrorCode.UNSUPPORTED_OPERATION,
            message=f"{fs_name} does not support {operation} operations",
            details={"operation": operation, "fs": fs_name},
        )

    @classmethod
    def not_a_directory(cls, path: str) -> "VirtualFsError":
        return cls(
            code=ErrorCode.NOT_A_DIRECTORY,
            message=f"Not a directory: {path}",
            details={"path": path},
        )

    @classmethod
    def permission_denied(cls, path: str, reason: str) -> "VirtualFsError":
        return cls(
            code=ErrorCode.PERMISSION_DENIED,
            message=f"Permission denied for '{path}': {reason}",
            details={"path": path, "reason": reason},
        )


class ConfigError(TraceProjectError):
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


class ScanError(TraceProjectError):
    """Static test scanner errors."""

    @classmethod
    def syntax_error(cls, path: str, line: int, reason: str) -> "ScanError":
        return cls(
            code=ErrorCode.SCAN_FAILED,
            message=f"Failed to scan {path}:{line}: {reason}",
            details={"path": path, "line": line, "reason": reason},
        )


class TraceError(TraceProjectError):
    """Trace archive errors."""

    @classmethod
    def load_failed(cls, path: str, reason: str) -> "TraceError":
        return cls(
            code=ErrorCode.TRACE_LOAD_FAILED,
            message=f"Failed to load trace {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def empty(cls, path: str) -> "TraceError":
        return cls(
            code=ErrorCode.TRACE_EMPTY,
            message=f"Trace {path} has no recorded context",
            details={"path": path},
        )
