"""Config module exports."""

from traceproject.config.loader import load_config
from traceproject.config.models import (
    LoggingConfig,
    OverlayConfig,
    ReportConfig,
    ScannerConfig,
    TraceProjectConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "OverlayConfig",
    "ReportConfig",
    "ScannerConfig",
    "TraceProjectConfig",
]
