"""Suite tree builder.

Walks a virtual filesystem and turns every source file into a suite of the
tests the static scanner finds in it. Subdirectory suites are spliced flat
into their parent's list; no directory-level suite is created.
"""

from __future__ import annotations

import asyncio

import structlog

from traceproject.config.models import OverlayConfig, ScannerConfig
from traceproject.report.ids import generate_test_id
from traceproject.report.models import JsonSuite, JsonTestCase, Location
from traceproject.scanner.parser import ParsedTest, parse
from traceproject.vfs.models import VirtualFile, VirtualFs

log = structlog.get_logger(__name__)


def _to_test_case(path: str, test: ParsedTest) -> JsonTestCase:
    return JsonTestCase(
        test_id=generate_test_id(path, test.title),
        title=test.title,
        location=Location(file=test.location.file, line=test.location.line or 0, column=0),
    )


async def _file_suite(fs: VirtualFs, file: VirtualFile, test_id_attribute: str) -> JsonSuite:
    code = await fs.read_file(file.path, "utf-8")
    parsed = parse(code, file.path, test_id_attribute)
    log.debug("suites.scanned", path=file.path, tests=len(parsed.tests))
    return JsonSuite(
        title=file.path,
        location=Location(file=file.path, line=0, column=0),
        entries=[_to_test_case(file.path, test) for test in parsed.tests],
    )


async def get_suites_recursively(
    fs: VirtualFs,
    directory: VirtualFile | None = None,
    *,
    overlay_config: OverlayConfig | None = None,
    scanner_config: ScannerConfig | None = None,
) -> list[JsonSuite]:
    """Build one suite per source file under directory (default: fs root).

    Files come before subdirectories, each in listing order. All files of a
    level are scanned concurrently, then all subdirectories are walked
    concurrently; the result is assembled after both batches finish.

    Raises:
        ScanError: If any file cannot be scanned
    """
    directory = directory or fs.root()
    extensions = tuple((overlay_config or OverlayConfig()).source_extensions)
    test_id_attribute = (scanner_config or ScannerConfig()).test_id_attribute

    children = await fs.list_files(directory.path)
    source_files = [f for f in children if f.kind == "file" and f.name.endswith(extensions)]
    directories = [d for d in children if d.kind == "directory"]

    file_suites = await asyncio.gather(
        *(_file_suite(fs, f, test_id_attribute) for f in source_files)
    )
    directory_suites = await asyncio.gather(
        *(
            get_suites_recursively(
                fs, d, overlay_config=overlay_config, scanner_config=scanner_config
            )
            for d in directories
        )
    )
    return [*file_suites, *(suite for suites in directory_suites for suite in suites)]
