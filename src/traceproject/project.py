"""Entry points for directory-backed projects."""

from __future__ import annotations

from pathlib import Path

from traceproject.config.loader import load_config
from traceproject.config.models import TraceProjectConfig
from traceproject.core.logging import configure_logging
from traceproject.report.models import ReportEvent
from traceproject.report.synthesizer import read_report
from traceproject.vfs.local import LocalVirtualFs
from traceproject.vfs.overlay import ProjectVirtualFs


def open_project(root_dir: Path, config: TraceProjectConfig | None = None) -> ProjectVirtualFs:
    """Overlay archive-backed sources on the directory at root_dir."""
    config = config or load_config(root_dir)
    return ProjectVirtualFs(LocalVirtualFs(root_dir), config.overlay, config.scanner)


async def synthesize_report(
    root_dir: Path, config: TraceProjectConfig | None = None
) -> list[ReportEvent]:
    """Load config from root_dir (unless given), apply its logging section and
    synthesize the project's report."""
    config = config or load_config(root_dir)
    configure_logging(config=config.logging)
    return await read_report(open_project(root_dir, config), config)
