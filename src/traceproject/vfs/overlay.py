"""Overlay filesystem presenting trace archives as test source files.

A source path such as ``tests/login.ts`` is served from the wrapped
filesystem when a real file exists there. Otherwise it is backed by the
archive ``tests/login.zip`` and the optional sidecar ``tests/login.json``
(holding ``{"title": ...}``), and its text is generated on read by replaying
the recorded trace.

Resolution order for a source path:
1. Concrete file in the wrapped filesystem (real file wins)
2. Archive/sidecar pair derived by suffix substitution
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import overload

import structlog

from traceproject.config.models import OverlayConfig, ScannerConfig
from traceproject.core.errors import TraceProjectError, VirtualFsError
from traceproject.trace.loader import load_trace
from traceproject.trace.script import extract_test_script, script_to_code
from traceproject.vfs.models import PermissionMode, VirtualFile, VirtualFs

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ArchivePaths:
    """Archive and sidecar metadata paths backing a synthetic source file."""

    archive_path: str
    metadata_path: str


def _replace_suffix(path: str, suffix: str, replacement: str) -> str:
    return path[: -len(suffix)] + replacement


def source_suffix(path: str, config: OverlayConfig) -> str | None:
    """Return the recognized source extension of path, if any."""
    for ext in config.source_extensions:
        if path.endswith(ext):
            return ext
    return None


def archive_paths_for(path: str, config: OverlayConfig | None = None) -> ArchivePaths | None:
    """Derive the archive/sidecar pair for a source path (None for other paths)."""
    config = config or OverlayConfig()
    ext = source_suffix(path, config)
    if ext is None:
        return None
    return ArchivePaths(
        archive_path=_replace_suffix(path, ext, config.archive_suffix),
        metadata_path=_replace_suffix(path, ext, config.metadata_suffix),
    )


def source_path_for(archive_path: str, config: OverlayConfig | None = None) -> str:
    """Map an archive path back to its synthetic source path."""
    config = config or OverlayConfig()
    return _replace_suffix(archive_path, config.archive_suffix, config.primary_extension)


class ProjectVirtualFs:
    """Read-only VirtualFs overlaying archive-backed source files on a wrapped VirtualFs."""

    def __init__(
        self,
        fs: VirtualFs,
        config: OverlayConfig | None = None,
        scanner_config: ScannerConfig | None = None,
    ) -> None:
        self._wrapped_fs = fs
        self._config = config or OverlayConfig()
        self._scanner_config = scanner_config or ScannerConfig()

    def root(self) -> VirtualFile:
        return self._wrapped_fs.root()

    async def check_permission(self, mode: PermissionMode) -> bool:
        return await self._wrapped_fs.check_permission(mode)

    async def get_file(self, path: str) -> VirtualFile | None:
        resolved = await self._resolve_path(path)
        if not isinstance(resolved, ArchivePaths):
            return resolved
        archive = await self._wrapped_fs.get_file(resolved.archive_path)
        if archive is None:
            return None
        return VirtualFile(kind="file", name=source_path_for(archive.name, self._config), path=path)

    def _is_archive(self, entry: VirtualFile) -> bool:
        return entry.kind == "file" and entry.name.endswith(self._config.archive_suffix)

    def _has_companion(self, archive: VirtualFile, names: set[str]) -> bool:
        suffix = self._config.archive_suffix
        return any(
            _replace_suffix(archive.name, suffix, ext) in names
            for ext in self._config.source_extensions
        )

    async def list_files(self, path: str | None = None) -> list[VirtualFile]:
        files = await self._wrapped_fs.list_files(path)
        names = {f.name for f in files}
        virtual_files = [
            VirtualFile(
                kind="file",
                name=source_path_for(f.name, self._config),
                path=source_path_for(f.path, self._config),
            )
            for f in files
            if self._is_archive(f) and not self._has_companion(f, names)
        ]
        return [*files, *virtual_files]

    @overload
    async def read_file(self, path: str) -> bytes: ...

    @overload
    async def read_file(self, path: str, encoding: str) -> str: ...

    async def read_file(self, path: str, encoding: str | None = None) -> str | bytes:
        resolved = await self._resolve_path(path)
        if resolved is None:
            raise VirtualFsError.file_not_found(path)
        if not isinstance(resolved, ArchivePaths):
            if encoding is None:
                return await self._wrapped_fs.read_file(path)
            return await self._wrapped_fs.read_file(path, encoding)
        if encoding is None:
            # Synthetic files only exist as text
            raise VirtualFsError.file_not_found(path)

        title = await self._read_title(resolved.metadata_path)
        trace_model = await load_trace(self._wrapped_fs, resolved.archive_path)
        context_entry = trace_model.context_entries[0]
        script = extract_test_script(context_entry, title=title)
        code = script_to_code(script, self._scanner_config.test_id_attribute)

        log.debug(
            "overlay.synthesized",
            path=path,
            archive=resolved.archive_path,
            actions=len(script.actions),
        )
        return code

    async def _read_title(self, metadata_path: str) -> str:
        default = self._config.default_title
        try:
            data = json.loads(await self._wrapped_fs.read_file(metadata_path, "utf-8"))
        except (TraceProjectError, OSError, ValueError) as e:
            log.debug("overlay.sidecar_unreadable", path=metadata_path, error=str(e))
            return default
        title = data.get("title") if isinstance(data, dict) else None
        return title if isinstance(title, str) else default

    async def write_file(self, path: str, data: str | bytes) -> None:  # noqa: ARG002
        raise VirtualFsError.unsupported_operation("write", type(self).__name__)

    async def _resolve_path(self, path: str) -> VirtualFile | ArchivePaths | None:
        concrete = await self._wrapped_fs.get_file(path)
        if concrete is not None:
            return concrete
        return archive_paths_for(path, self._config)
