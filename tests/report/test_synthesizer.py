"""Tests for report synthesis."""

from __future__ import annotations

import json

import pytest

from traceproject.config.models import ReportConfig, TraceProjectConfig
from traceproject.core.errors import ScanError
from traceproject.report.models import (
    FullResult,
    JsonConfig,
    JsonProject,
    JsonSuite,
    Location,
    ReportEvent,
    ReportMethod,
)
from traceproject.report.synthesizer import build_config, build_project, read_report, report_to_json
from traceproject.vfs.memory import MemoryVirtualFs


class TestReadReport:
    """Event sequence of a synthesized run."""

    @pytest.mark.asyncio
    async def test_empty_project_yields_four_events(self) -> None:
        events = await read_report(MemoryVirtualFs())

        assert [e.method for e in events] == [
            ReportMethod.ON_CONFIGURE,
            ReportMethod.ON_PROJECT,
            ReportMethod.ON_BEGIN,
            ReportMethod.ON_END,
        ]
        assert events[1].params["project"].suites == []
        assert events[2].params == {}

    @pytest.mark.asyncio
    async def test_end_event_is_passed(self) -> None:
        events = await read_report(MemoryVirtualFs())

        result = events[-1].params["result"]
        assert isinstance(result, FullResult)
        assert result.status == "passed"
        assert result.start_time > 0
        assert result.duration >= 0

    @pytest.mark.asyncio
    async def test_no_per_test_events(self) -> None:
        fs = MemoryVirtualFs({"a.spec.ts": "test('one', () => {});\ntest('two', () => {});"})

        events = await read_report(fs)

        methods = {e.method for e in events}
        assert ReportMethod.ON_TEST_BEGIN not in methods
        assert ReportMethod.ON_TEST_END not in methods

    @pytest.mark.asyncio
    async def test_tests_have_distinct_ids_and_defaults(self) -> None:
        fs = MemoryVirtualFs({"a.spec.ts": "test('one', () => {});\ntest('two', () => {});"})

        events = await read_report(fs)

        [suite] = events[1].params["project"].suites
        tests = suite.tests
        assert [t.title for t in tests] == ["one", "two"]
        assert len({t.test_id for t in tests}) == 2
        assert all(t.retries == 0 and t.repeat_each_index == 0 for t in tests)
        assert all(t.tags == [] and t.annotations == [] for t in tests)

    @pytest.mark.asyncio
    async def test_config_values_flow_into_events(self) -> None:
        config = TraceProjectConfig(
            report=ReportConfig(project_name="firefox", version="1.50.0", timeout_ms=5000)
        )

        events = await read_report(MemoryVirtualFs(), config)

        assert events[0].params["config"].version == "1.50.0"
        project = events[1].params["project"]
        assert (project.name, project.timeout) == ("firefox", 5000)

    @pytest.mark.asyncio
    async def test_scan_failure_aborts(self) -> None:
        fs = MemoryVirtualFs({"good.ts": "test('x', () => {});", "bad.ts": "const s = `"})

        with pytest.raises(ScanError):
            await read_report(fs)


class TestBuilders:
    """Static run metadata."""

    def test_build_config_defaults(self) -> None:
        assert build_config(TraceProjectConfig()) == JsonConfig(
            config_file="../playwright.config.ts",
            version="1.48.2",
            global_timeout=0,
            max_failures=0,
            metadata={},
            root_dir="",
            workers=1,
        )

    def test_build_project_defaults(self) -> None:
        project = build_project(TraceProjectConfig(), [])

        assert project == JsonProject(
            name="chromium",
            suites=[],
            output_dir="test-results",
            repeat_each=1,
            retries=0,
            test_dir="",
            test_ignore=[],
            test_match=[{"s": "**/*.@(spec|test).?(c|m)[jt]s?(x)"}],
            timeout=30000,
            grep=[{"r": {"source": ".*", "flags": ""}}],
            grep_invert=[],
            dependencies=[],
            snapshot_dir="",
        )


class TestSerialization:
    """Wire representation."""

    def test_project_keys_are_camel_case(self) -> None:
        data = build_project(TraceProjectConfig(), []).to_dict()

        assert set(data) == {
            "metadata",
            "name",
            "outputDir",
            "repeatEach",
            "retries",
            "testDir",
            "testIgnore",
            "testMatch",
            "timeout",
            "suites",
            "grep",
            "grepInvert",
            "dependencies",
            "snapshotDir",
        }

    def test_config_keys_are_camel_case(self) -> None:
        data = build_config(TraceProjectConfig()).to_dict()

        assert data["configFile"] == "../playwright.config.ts"
        assert {"globalTimeout", "maxFailures", "rootDir", "workers", "version"} <= set(data)

    @pytest.mark.asyncio
    async def test_report_to_json(self) -> None:
        fs = MemoryVirtualFs({"a.ts": "test('one', () => {});"})

        payload = json.loads(report_to_json(await read_report(fs), indent=2))

        assert [e["method"] for e in payload] == ["onConfigure", "onProject", "onBegin", "onEnd"]
        [suite] = payload[1]["params"]["project"]["suites"]
        assert suite["location"] == {"file": "a.ts", "line": 0, "column": 0}
        [test] = suite["entries"]
        assert test["location"] == {"file": "a.ts", "line": 1, "column": 0}
        assert test["repeatEachIndex"] == 0
        assert payload[3]["params"]["result"]["status"] == "passed"

    def test_nested_suites_serialize(self) -> None:
        inner = JsonSuite(title="inner", location=Location("x.ts"))
        event = ReportEvent(
            ReportMethod.ON_PROJECT,
            {"project": JsonProject(name="p", suites=[JsonSuite("outer", Location("x.ts"), [inner])])},
        )

        data = event.to_dict()

        assert data["params"]["project"]["suites"][0]["entries"][0]["title"] == "inner"


class TestScannerEdgeCases:
    """Lexically tricky sources still produce a report."""

    @pytest.mark.asyncio
    async def test_regex_literal_with_quote(self) -> None:
        fs = MemoryVirtualFs(
            {"a.spec.ts": "function q(x) { return /'/.test(x); }\ntest('a', async () => {});\n"}
        )

        events = await read_report(fs)

        [suite] = events[1].params["project"].suites
        assert [t.title for t in suite.tests] == ["a"]

    @pytest.mark.asyncio
    async def test_surrogate_pair_title(self) -> None:
        fs = MemoryVirtualFs({"a.spec.ts": "test('smile \\ud83d\\ude00', async () => {});\n"})

        events = await read_report(fs)

        [suite] = events[1].params["project"].suites
        assert [t.title for t in suite.tests] == ["smile \U0001f600"]
        assert json.loads(report_to_json(events))[1]["params"]["project"]["suites"][0][
            "entries"
        ][0]["title"] == "smile \U0001f600"
