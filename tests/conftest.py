"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides builders for recorded trace archives.
"""

import io
import json
import sys
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

TraceBuilder = Callable[..., bytes]


def _trace_lines(
    actions: list[dict[str, Any]],
    options: dict[str, Any],
    browser_name: str,
) -> list[str]:
    events: list[dict[str, Any]] = [
        {
            "version": 7,
            "type": "context-options",
            "browserName": browser_name,
            "options": options,
            "wallTime": 1700000000000,
        }
    ]
    for index, action in enumerate(actions, start=1):
        call_id = f"call@{index}"
        events.append(
            {
                "type": "before",
                "callId": call_id,
                "startTime": float(index),
                "class": action.get("class", "Frame"),
                "method": action["method"],
                "params": action.get("params", {}),
                "pageId": action.get("pageId", "page@1"),
            }
        )
        after: dict[str, Any] = {"type": "after", "callId": call_id, "endTime": index + 0.5}
        if "error" in action:
            after["error"] = {"error": {"message": action["error"]}}
        events.append(after)
    return [json.dumps(e) for e in events]


@pytest.fixture
def make_trace_archive() -> TraceBuilder:
    """Build the bytes of a zip trace archive holding one recorded context."""

    def build(
        actions: list[dict[str, Any]] | None = None,
        *,
        options: dict[str, Any] | None = None,
        browser_name: str = "chromium",
    ) -> bytes:
        lines = _trace_lines(actions or [], options or {}, browser_name)
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("trace.trace", "\n".join(lines) + "\n")
            archive.writestr("trace.network", "")
        return buffer.getvalue()

    return build


@pytest.fixture
def login_actions() -> list[dict[str, Any]]:
    return [
        {"method": "goto", "params": {"url": "https://example.com/login"}},
        {
            "method": "fill",
            "params": {"selector": "internal:label=\"Username\"i", "value": "alice"},
        },
        {
            "method": "click",
            "params": {"selector": "internal:role=button[name=\"Sign in\"i]"},
        },
    ]
