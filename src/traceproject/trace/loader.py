"""Trace archive loading.

An archive is a zip file whose ``*.trace`` members hold newline-delimited
JSON events. Each ``context-options`` event starts a new context; ``before``
and ``after`` events bracket one API call.
"""

from __future__ import annotations

import io
import json
import zipfile
from typing import TYPE_CHECKING, Any

import structlog

from traceproject.core.errors import TraceError
from traceproject.trace.models import ActionEntry, ContextEntry, TraceModel

if TYPE_CHECKING:
    from traceproject.vfs.models import VirtualFs

log = structlog.get_logger(__name__)

TRACE_MEMBER_SUFFIX = ".trace"


def _read_members(archive_path: str, data: bytes) -> list[str]:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            names = sorted(n for n in archive.namelist() if n.endswith(TRACE_MEMBER_SUFFIX))
            return [archive.read(name).decode("utf-8") for name in names]
    except (zipfile.BadZipFile, UnicodeDecodeError) as e:
        raise TraceError.load_failed(archive_path, str(e)) from e


def _iter_events(text: str) -> list[dict[str, Any]]:
    events: list[dict[str, Any]] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        try:
            event = json.loads(line)
        except json.JSONDecodeError:
            # Live traces may end with a partially written line
            log.debug("trace.skipped_line", length=len(line))
            continue
        if isinstance(event, dict):
            events.append(event)
    return events


def _error_message(error: Any) -> str | None:
    if error is None:
        return None
    if isinstance(error, dict):
        inner = error.get("error", error)
        if isinstance(inner, dict):
            return str(inner.get("message", "unknown error"))
        return str(inner)
    return str(error)


def parse_trace_events(archive_path: str, texts: list[str]) -> TraceModel:
    """Build a TraceModel from the text of every trace member."""
    model = TraceModel(archive_path=archive_path)
    current: ContextEntry | None = None
    pending: dict[str, ActionEntry] = {}

    for text in texts:
        for event in _iter_events(text):
            kind = event.get("type")
            if kind == "context-options":
                current = ContextEntry(
                    browser_name=event.get("browserName", "chromium"),
                    options=dict(event.get("options") or {}),
                    title=event.get("title"),
                    wall_time=event.get("wallTime"),
                )
                model.context_entries.append(current)
                pending = {}
            elif kind == "before" and current is not None:
                action = ActionEntry(
                    call_id=str(event.get("callId", "")),
                    class_name=event.get("class", ""),
                    method=event.get("method", ""),
                    params=dict(event.get("params") or {}),
                    page_id=event.get("pageId"),
                    start_time=float(event.get("startTime") or 0.0),
                )
                current.actions.append(action)
                pending[action.call_id] = action
            elif kind == "after":
                after = pending.pop(str(event.get("callId", "")), None)
                if after is not None:
                    after.end_time = event.get("endTime")
                    after.error = _error_message(event.get("error"))

    return model


async def load_trace(fs: VirtualFs, archive_path: str) -> TraceModel:
    """Load a trace archive through a virtual filesystem.

    Raises:
        VirtualFsError(FILE_NOT_FOUND): If the archive does not exist
        TraceError: If the archive is corrupt or records no context
    """
    data = await fs.read_file(archive_path)
    model = parse_trace_events(archive_path, _read_members(archive_path, data))
    if not model.context_entries:
        raise TraceError.empty(archive_path)

    log.debug(
        "trace.loaded",
        path=archive_path,
        contexts=len(model.context_entries),
        actions=sum(len(c.actions) for c in model.context_entries),
    )
    return model
