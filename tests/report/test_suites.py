"""Tests for the suite tree builder."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from traceproject.config.models import OverlayConfig, ScannerConfig
from traceproject.core.errors import ErrorCode, ScanError
from traceproject.report.ids import generate_test_id
from traceproject.report.models import JsonTestCase, Location
from traceproject.report.suites import get_suites_recursively
from traceproject.vfs.local import LocalVirtualFs
from traceproject.vfs.memory import MemoryVirtualFs
from traceproject.vfs.overlay import ProjectVirtualFs


class TestSuiteTree:
    """Shape and ordering of the suite list."""

    @pytest.mark.asyncio
    async def test_empty_project(self) -> None:
        assert await get_suites_recursively(MemoryVirtualFs()) == []

    @pytest.mark.asyncio
    async def test_one_suite_per_source_file(self) -> None:
        fs = MemoryVirtualFs(
            {
                "cart.spec.ts": "test('adds', () => {});\n\ntest('removes', () => {});\n",
                "README.md": "test('not scanned', () => {});",
            }
        )

        [suite] = await get_suites_recursively(fs)

        assert suite.title == "cart.spec.ts"
        assert suite.location == Location("cart.spec.ts", 0, 0)
        assert suite.tests == [
            JsonTestCase(
                test_id=generate_test_id("cart.spec.ts", "adds"),
                title="adds",
                location=Location("cart.spec.ts", 1, 0),
            ),
            JsonTestCase(
                test_id=generate_test_id("cart.spec.ts", "removes"),
                title="removes",
                location=Location("cart.spec.ts", 3, 0),
            ),
        ]

    @pytest.mark.asyncio
    async def test_files_before_directories_and_flattened(self) -> None:
        fs = MemoryVirtualFs(
            {
                "nested/deeper/c.spec.ts": "test('c', () => {});",
                "b.spec.js": "it('b', () => {});",
                "nested/n.spec.ts": "test('n', () => {});",
                "a.spec.ts": "test('a', () => {});",
            }
        )

        suites = await get_suites_recursively(fs)

        assert [s.title for s in suites] == [
            "b.spec.js",
            "a.spec.ts",
            "nested/n.spec.ts",
            "nested/deeper/c.spec.ts",
        ]
        assert all(len(s.entries) == 1 for s in suites)

    @pytest.mark.asyncio
    async def test_file_without_tests_still_has_suite(self) -> None:
        [suite] = await get_suites_recursively(MemoryVirtualFs({"helpers.ts": "export {};"}))

        assert suite.entries == []

    @pytest.mark.asyncio
    async def test_walk_starts_at_given_directory(self) -> None:
        fs = MemoryVirtualFs({"top.ts": "test('top', () => {});", "sub/x.ts": "test('x', () => {});"})
        sub = await fs.get_file("sub")

        suites = await get_suites_recursively(fs, sub)

        assert [s.title for s in suites] == ["sub/x.ts"]

    @pytest.mark.asyncio
    async def test_configured_extensions_and_attribute(self) -> None:
        fs = MemoryVirtualFs({"a.ts": "test('a', () => {});", "b.mjs": "test('b', () => {});"})

        suites = await get_suites_recursively(
            fs,
            overlay_config=OverlayConfig(source_extensions=[".mjs"]),
            scanner_config=ScannerConfig(test_id_attribute="data-qa"),
        )

        assert [s.title for s in suites] == ["b.mjs"]

    @pytest.mark.asyncio
    async def test_local_directory_order(self, tmp_path: Path) -> None:
        (tmp_path / "z_dir").mkdir()
        (tmp_path / "z_dir" / "inner.ts").write_text("test('inner', () => {});")
        (tmp_path / "b.ts").write_text("test('b', () => {});")
        (tmp_path / "A.ts").write_text("test('A', () => {});")

        suites = await get_suites_recursively(LocalVirtualFs(tmp_path))

        assert [s.title for s in suites] == ["A.ts", "b.ts", "z_dir/inner.ts"]


class TestSuiteFailures:
    """Scan errors abort the walk."""

    @pytest.mark.asyncio
    async def test_scan_error_propagates(self) -> None:
        fs = MemoryVirtualFs(
            {"ok.ts": "test('ok', () => {});", "dir/broken.ts": "test('never closed"}
        )

        with pytest.raises(ScanError) as exc_info:
            await get_suites_recursively(fs)

        assert exc_info.value.code == ErrorCode.SCAN_FAILED
        assert exc_info.value.details["path"] == "dir/broken.ts"


class TestOverlaySuites:
    """Archive-backed sources appear as ordinary suites."""

    @pytest.mark.asyncio
    async def test_synthetic_file_is_scanned(
        self, make_trace_archive: Any, login_actions: list[dict[str, Any]]
    ) -> None:
        wrapped = MemoryVirtualFs(
            {
                "flows/login.zip": make_trace_archive(login_actions),
                "flows/login.json": '{"title": "Login flow"}',
                "flows/manual.ts": "test('manual', () => {});",
            }
        )

        suites = await get_suites_recursively(ProjectVirtualFs(wrapped))

        assert [s.title for s in suites] == ["flows/manual.ts", "flows/login.ts"]
        [recorded] = suites[1].tests
        assert recorded.title == "Login flow"
        assert recorded.test_id == generate_test_id("flows/login.ts", "Login flow")
        assert recorded.location == Location("flows/login.ts", 3, 0)
