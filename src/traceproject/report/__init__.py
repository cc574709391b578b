"""Report synthesis from a virtual project."""

from traceproject.report.ids import file_id, generate_test_id
from traceproject.report.models import (
    FullResult,
    JsonConfig,
    JsonProject,
    JsonSuite,
    JsonTestCase,
    Location,
    ReportEvent,
    ReportMethod,
)
from traceproject.report.suites import get_suites_recursively
from traceproject.report.synthesizer import read_report, report_to_json

__all__ = [
    "FullResult",
    "JsonConfig",
    "JsonProject",
    "JsonSuite",
    "JsonTestCase",
    "Location",
    "ReportEvent",
    "ReportMethod",
    "file_id",
    "generate_test_id",
    "get_suites_recursively",
    "read_report",
    "report_to_json",
]
