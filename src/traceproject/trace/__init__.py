"""Trace archive loading and script generation."""

from traceproject.trace.loader import load_trace, parse_trace_events
from traceproject.trace.models import (
    ActionEntry,
    ContextEntry,
    ScriptAction,
    TestScript,
    TraceModel,
)
from traceproject.trace.script import extract_test_script, script_to_code

__all__ = [
    "ActionEntry",
    "ContextEntry",
    "ScriptAction",
    "TestScript",
    "TraceModel",
    "extract_test_script",
    "load_trace",
    "parse_trace_events",
    "script_to_code",
]
