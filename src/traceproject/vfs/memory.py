"""In-memory virtual filesystem.

Directories are implied by file paths. Listings follow insertion order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import overload

from traceproject.core.errors import VirtualFsError
from traceproject.vfs.models import PermissionMode, VirtualFile, join_path, split_name


def _normalize(path: str | None) -> str:
    return (path or "").strip("/")


class MemoryVirtualFs:
    """VirtualFs holding file contents in a dict keyed by logical path."""

    def __init__(self, files: Mapping[str, str | bytes] | None = None, *, name: str = "") -> None:
        self._name = name
        self._files: dict[str, bytes] = {}
        for path, data in (files or {}).items():
            self._files[_normalize(path)] = data.encode("utf-8") if isinstance(data, str) else data

    def root(self) -> VirtualFile:
        return VirtualFile(kind="directory", name=self._name, path="")

    async def check_permission(self, mode: PermissionMode) -> bool:  # noqa: ARG002
        return True

    def _is_directory(self, path: str) -> bool:
        prefix = f"{path}/"
        return any(p.startswith(prefix) for p in self._files)

    async def get_file(self, path: str) -> VirtualFile | None:
        path = _normalize(path)
        if not path:
            return self.root()
        if path in self._files:
            return VirtualFile(kind="file", name=split_name(path), path=path)
        if self._is_directory(path):
            return VirtualFile(kind="directory", name=split_name(path), path=path)
        return None

    async def list_files(self, path: str | None = None) -> list[VirtualFile]:
        directory = _normalize(path)
        if directory in self._files:
            raise VirtualFsError.not_a_directory(directory)
        prefix = f"{directory}/" if directory else ""

        entries: dict[str, VirtualFile] = {}
        for file_path in self._files:
            if not file_path.startswith(prefix):
                continue
            head, _, rest = file_path[len(prefix) :].partition("/")
            if head in entries:
                continue
            entries[head] = VirtualFile(
                kind="directory" if rest else "file",
                name=head,
                path=join_path(directory, head),
            )
        return list(entries.values())

    @overload
    async def read_file(self, path: str) -> bytes: ...

    @overload
    async def read_file(self, path: str, encoding: str) -> str: ...

    async def read_file(self, path: str, encoding: str | None = None) -> str | bytes:
        data = self._files.get(_normalize(path))
        if data is None:
            raise VirtualFsError.file_not_found(path)
        return data if encoding is None else data.decode(encoding)

    async def write_file(self, path: str, data: str | bytes) -> None:
        self._files[_normalize(path)] = data.encode("utf-8") if isinstance(data, str) else data
