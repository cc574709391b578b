"""Reporter wire models.

Canonical structures of the report event stream. Field names are snake_case
in Python and serialize to the camelCase keys report front ends expect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal

# =============================================================================
# Test Tree
# =============================================================================


@dataclass
class Location:
    """Source position of a suite or test."""

    file: str
    line: int = 0
    column: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "line": self.line, "column": self.column}


@dataclass
class JsonTestCase:
    """A single discovered test."""

    test_id: str
    title: str
    location: Location
    retries: int = 0
    tags: list[str] = field(default_factory=list)
    repeat_each_index: int = 0
    annotations: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "testId": self.test_id,
            "title": self.title,
            "location": self.location.to_dict(),
            "retries": self.retries,
            "tags": list(self.tags),
            "repeatEachIndex": self.repeat_each_index,
            "annotations": list(self.annotations),
        }


@dataclass
class JsonSuite:
    """A group of tests (one source file) or of nested suites."""

    title: str
    location: Location
    entries: list[JsonSuite | JsonTestCase] = field(default_factory=list)

    @property
    def tests(self) -> list[JsonTestCase]:
        """All tests in this suite and its descendants, in tree order."""
        found: list[JsonTestCase] = []
        for entry in self.entries:
            if isinstance(entry, JsonSuite):
                found.extend(entry.tests)
            else:
                found.append(entry)
        return found

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "location": self.location.to_dict(),
            "entries": [entry.to_dict() for entry in self.entries],
        }


# =============================================================================
# Run Metadata
# =============================================================================


@dataclass
class JsonConfig:
    """Global run configuration."""

    config_file: str
    version: str
    global_timeout: int = 0
    max_failures: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)
    root_dir: str = ""
    workers: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "configFile": self.config_file,
            "globalTimeout": self.global_timeout,
            "maxFailures": self.max_failures,
            "metadata": dict(self.metadata),
            "rootDir": self.root_dir,
            "version": self.version,
            "workers": self.workers,
        }


@dataclass
class JsonProject:
    """The single project of a synthesized run."""

    name: str
    suites: list[JsonSuite]
    output_dir: str = "test-results"
    repeat_each: int = 1
    retries: int = 0
    test_dir: str = ""
    test_ignore: list[dict[str, Any]] = field(default_factory=list)
    test_match: list[dict[str, Any]] = field(default_factory=list)
    timeout: int = 30000
    grep: list[dict[str, Any]] = field(default_factory=list)
    grep_invert: list[dict[str, Any]] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    snapshot_dir: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "name": self.name,
            "outputDir": self.output_dir,
            "repeatEach": self.repeat_each,
            "retries": self.retries,
            "testDir": self.test_dir,
            "testIgnore": list(self.test_ignore),
            "testMatch": list(self.test_match),
            "timeout": self.timeout,
            "suites": [suite.to_dict() for suite in self.suites],
            "grep": list(self.grep),
            "grepInvert": list(self.grep_invert),
            "dependencies": list(self.dependencies),
            "snapshotDir": self.snapshot_dir,
        }


RunStatus = Literal["passed", "failed", "timedout", "interrupted"]


@dataclass
class FullResult:
    """Aggregate outcome carried by onEnd."""

    status: RunStatus
    start_time: int  # epoch milliseconds
    duration: int  # milliseconds

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "startTime": self.start_time, "duration": self.duration}


# =============================================================================
# Events
# =============================================================================


class ReportMethod(StrEnum):
    """Reporter event names."""

    ON_CONFIGURE = "onConfigure"
    ON_PROJECT = "onProject"
    ON_BEGIN = "onBegin"
    ON_TEST_BEGIN = "onTestBegin"
    ON_TEST_END = "onTestEnd"
    ON_END = "onEnd"


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


@dataclass
class ReportEvent:
    """One record of the report event stream."""

    method: ReportMethod
    params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"method": self.method.value, "params": _serialize(self.params)}
