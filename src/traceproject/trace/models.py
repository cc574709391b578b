"""Structured model of a recorded trace archive."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ActionEntry:
    """A single recorded API call."""

    call_id: str
    class_name: str  # e.g. "Frame", "Page"
    method: str  # e.g. "click", "goto"
    params: dict[str, Any] = field(default_factory=dict)
    page_id: str | None = None
    start_time: float = 0.0
    end_time: float | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class ContextEntry:
    """One recorded browser context and its actions."""

    browser_name: str
    options: dict[str, Any] = field(default_factory=dict)
    title: str | None = None
    wall_time: float | None = None
    actions: list[ActionEntry] = field(default_factory=list)


@dataclass
class TraceModel:
    """All contexts found in a trace archive, in recorded order."""

    archive_path: str
    context_entries: list[ContextEntry] = field(default_factory=list)


@dataclass
class ScriptAction:
    """A user-facing action kept in a test script."""

    page_alias: str
    method: str
    selector: str | None = None
    args: list[Any] = field(default_factory=list)


@dataclass
class TestScript:
    """A test script description ready for code generation."""

    __test__ = False  # not a pytest class

    title: str
    browser_name: str
    options: dict[str, Any] = field(default_factory=dict)
    actions: list[ScriptAction] = field(default_factory=list)

    @property
    def page_aliases(self) -> list[str]:
        aliases: list[str] = []
        for action in self.actions:
            if action.page_alias not in aliases:
                aliases.append(action.page_alias)
        return aliases
