"""Tests for error types and codes."""

import pytest

from traceproject.core.errors import (
    ConfigError,
    ErrorCode,
    ScanError,
    TraceError,
    TraceProjectError,
    VirtualFsError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.FILE_NOT_FOUND, 1000),
            (ErrorCode.UNSUPPORTED_OPERATION, 1000),
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.SCAN_FAILED, 3000),
            (ErrorCode.TRACE_LOAD_FAILED, 4000),
            (ErrorCode.TRACE_EMPTY, 4000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestTraceProjectError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = TraceProjectError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        error = TraceProjectError(code=ErrorCode.TRACE_EMPTY, message="Something broke")

        assert str(error) == "[4002] TRACE_EMPTY: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors behave as regular exceptions."""
        with pytest.raises(TraceProjectError) as exc_info:
            raise VirtualFsError.file_not_found("a.ts")

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND


class TestVirtualFsError:
    """VirtualFsError factory method tests."""

    def test_file_not_found_carries_path(self) -> None:
        error = VirtualFsError.file_not_found("tests/login.ts")

        assert error.code == ErrorCode.FILE_NOT_FOUND
        assert error.details == {"path": "tests/login.ts"}
        assert "tests/login.ts" in error.message

    def test_unsupported_operation_names_operation_and_fs(self) -> None:
        error = VirtualFsError.unsupported_operation("write", "ProjectVirtualFs")

        assert error.code == ErrorCode.UNSUPPORTED_OPERATION
        assert error.message == "ProjectVirtualFs does not support write operations"
        assert not error.retryable

    def test_permission_denied_includes_reason(self) -> None:
        error = VirtualFsError.permission_denied("../etc", "path escapes filesystem root")

        assert error.code == ErrorCode.PERMISSION_DENIED
        assert error.details["reason"] == "path escapes filesystem root"


class TestConfigError:
    """ConfigError factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            ("parse_error", {"path": "/foo", "reason": "bad yaml"}, ErrorCode.CONFIG_PARSE_ERROR),
            (
                "invalid_value",
                {"field": "overlay.archive_suffix", "value": "zip", "reason": "no dot"},
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory: str, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        """Factory methods produce errors with correct error codes."""
        error = getattr(ConfigError, factory)(**kwargs)

        assert error.code == expected_code

    def test_given_invalid_value_when_created_then_value_stringified(self) -> None:
        error = ConfigError.invalid_value("report.timeout_ms", -1, "negative")

        assert error.details["value"] == "-1"


class TestScanAndTraceErrors:
    """ScanError and TraceError factory tests."""

    def test_scan_error_includes_location(self) -> None:
        error = ScanError.syntax_error("a.spec.ts", 12, "unterminated string literal")

        assert error.code == ErrorCode.SCAN_FAILED
        assert error.message == "Failed to scan a.spec.ts:12: unterminated string literal"
        assert error.details["line"] == 12

    def test_trace_load_failed(self) -> None:
        error = TraceError.load_failed("a.zip", "File is not a zip file")

        assert error.code == ErrorCode.TRACE_LOAD_FAILED
        assert error.details == {"path": "a.zip", "reason": "File is not a zip file"}

    def test_trace_empty(self) -> None:
        assert TraceError.empty("a.zip").code == ErrorCode.TRACE_EMPTY
