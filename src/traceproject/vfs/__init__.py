"""Virtual filesystem backends and the archive overlay."""

from traceproject.vfs.local import LocalVirtualFs
from traceproject.vfs.memory import MemoryVirtualFs
from traceproject.vfs.models import FileKind, PermissionMode, VirtualFile, VirtualFs
from traceproject.vfs.overlay import (
    ArchivePaths,
    ProjectVirtualFs,
    archive_paths_for,
    source_path_for,
)

__all__ = [
    "ArchivePaths",
    "FileKind",
    "LocalVirtualFs",
    "MemoryVirtualFs",
    "PermissionMode",
    "ProjectVirtualFs",
    "VirtualFile",
    "VirtualFs",
    "archive_paths_for",
    "source_path_for",
]
