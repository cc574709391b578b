"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (TRACEPROJECT__SECTION__KEY)
3. Project YAML (.traceproject/config.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    TRACEPROJECT__<SECTION>__<KEY>=<VALUE>

Examples:
    TRACEPROJECT__LOGGING__LEVEL=DEBUG
    TRACEPROJECT__OVERLAY__DEFAULT_TITLE=recorded
    TRACEPROJECT__REPORT__PROJECT_NAME=firefox
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

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
        TRACEPROJECT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every synthesized file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


def _validate_suffix(v: str) -> str:
    if not v.startswith(".") or len(v) < 2:
        raise ValueError(f"Suffix must start with '.': {v!r}")
    return v


class OverlayConfig(BaseModel):
    """Archive overlay configuration.

    The first source extension names synthesized files.

    Env vars:
        TRACEPROJECT__OVERLAY__ARCHIVE_SUFFIX: Suffix of recorded trace archives
        TRACEPROJECT__OVERLAY__METADATA_SUFFIX: Suffix of sidecar metadata files
        TRACEPROJECT__OVERLAY__DEFAULT_TITLE: Title used when no sidecar title exists
    """

    source_extensions: list[str] = Field(
        default_factory=lambda: [".ts", ".js"],
        description="Extensions treated as test sources.",
    )
    archive_suffix: str = Field(default=".zip")
    metadata_suffix: str = Field(default=".json")
    default_title: str = Field(default="test")

    @field_validator("source_extensions")
    @classmethod
    def validate_source_extensions(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one source extension is required")
        return [_validate_suffix(ext) for ext in v]

    @field_validator("archive_suffix", "metadata_suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        return _validate_suffix(v)

    @property
    def primary_extension(self) -> str:
        return self.source_extensions[0]


class ScannerConfig(BaseModel):
    """Static test scanner configuration."""

    test_id_attribute: str = Field(
        default="data-testid",
        description="DOM attribute used by getByTestId locators.",
    )


class ReportConfig(BaseModel):
    """Fixed metadata of the synthesized run.

    Env vars:
        TRACEPROJECT__REPORT__VERSION: Reporter protocol version string
        TRACEPROJECT__REPORT__PROJECT_NAME: Name of the single reported project
    """

    config_file: str = "../playwright.config.ts"
    version: str = "1.48.2"
    project_name: str = Field(default="chromium", description="Target browser project.")
    output_dir: str = "test-results"
    timeout_ms: int = Field(default=30000, ge=0)
    test_match: list[dict[str, Any]] = Field(
        default_factory=lambda: [{"s": "**/*.@(spec|test).?(c|m)[jt]s?(x)"}]
    )
    grep: list[dict[str, Any]] = Field(
        default_factory=lambda: [{"r": {"source": ".*", "flags": ""}}]
    )


class TraceProjectConfig(BaseModel):
    """Root configuration for traceproject."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    overlay: OverlayConfig = Field(default_factory=OverlayConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
