"""Virtual filesystem contracts.

Logical paths are forward-slash delimited and relative to the filesystem
root. The root directory itself has the empty path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, overload, runtime_checkable

FileKind = Literal["file", "directory"]
PermissionMode = Literal["read", "readwrite"]


@dataclass(frozen=True)
class VirtualFile:
    """A file or directory entry in a virtual filesystem."""

    kind: FileKind
    name: str
    path: str


@runtime_checkable
class VirtualFs(Protocol):
    """Storage backend consumed by the overlay and the report synthesizer."""

    def root(self) -> VirtualFile: ...

    async def check_permission(self, mode: PermissionMode) -> bool: ...

    async def get_file(self, path: str) -> VirtualFile | None: ...

    async def list_files(self, path: str | None = None) -> list[VirtualFile]: ...

    @overload
    async def read_file(self, path: str) -> bytes: ...

    @overload
    async def read_file(self, path: str, encoding: str) -> str: ...

    async def read_file(self, path: str, encoding: str | None = None) -> str | bytes: ...

    async def write_file(self, path: str, data: str | bytes) -> None: ...


def join_path(directory: str, name: str) -> str:
    """Join a logical directory path and an entry name."""
    return f"{directory}/{name}" if directory else name


def split_name(path: str) -> str:
    """Return the last segment of a logical path."""
    return path.rstrip("/").rsplit("/", 1)[-1]
