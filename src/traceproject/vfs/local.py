"""Directory-backed virtual filesystem.

Blocking disk I/O runs in the event loop's default thread pool executor.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Any, TypeVar, overload

from traceproject.core.errors import VirtualFsError
from traceproject.vfs.models import PermissionMode, VirtualFile

T = TypeVar("T")


async def _run_sync(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))


def validate_path_in_root(root_dir: Path, user_path: str) -> Path:
    """Validate that user_path is within root_dir, preventing traversal attacks.

    Args:
        root_dir: Filesystem root directory
        user_path: Logical path relative to the root

    Returns:
        Resolved absolute path if valid

    Raises:
        VirtualFsError(PERMISSION_DENIED): If path escapes root_dir
    """
    resolved_root = root_dir.resolve()
    full_path = (resolved_root / user_path.lstrip("/")).resolve()

    if not full_path.is_relative_to(resolved_root):
        raise VirtualFsError.permission_denied(user_path, "path escapes filesystem root")

    return full_path


class LocalVirtualFs:
    """VirtualFs over a real directory."""

    def __init__(self, root_dir: Path) -> None:
        self._root_dir = root_dir.resolve()

    def root(self) -> VirtualFile:
        return VirtualFile(kind="directory", name=self._root_dir.name, path="")

    async def check_permission(self, mode: PermissionMode) -> bool:
        flags = os.R_OK if mode == "read" else os.R_OK | os.W_OK
        return await _run_sync(os.access, self._root_dir, flags)

    def _to_entry(self, item: Path) -> VirtualFile:
        return VirtualFile(
            kind="directory" if item.is_dir() else "file",
            name=item.name,
            path=item.relative_to(self._root_dir).as_posix(),
        )

    async def get_file(self, path: str) -> VirtualFile | None:
        full_path = validate_path_in_root(self._root_dir, path)
        if full_path == self._root_dir:
            return self.root()
        if not await _run_sync(full_path.exists):
            return None
        return self._to_entry(full_path)

    def _list_sync(self, target_dir: Path) -> list[VirtualFile]:
        entries = [
            self._to_entry(item) for item in target_dir.iterdir() if not item.name.startswith(".")
        ]
        # Directories first, then alphabetically
        entries.sort(key=lambda e: (e.kind != "directory", e.name.lower()))
        return entries

    async def list_files(self, path: str | None = None) -> list[VirtualFile]:
        target_dir = validate_path_in_root(self._root_dir, path) if path else self._root_dir
        if not target_dir.exists():
            return []
        if not target_dir.is_dir():
            raise VirtualFsError.not_a_directory(path or "")
        return await _run_sync(self._list_sync, target_dir)

    @overload
    async def read_file(self, path: str) -> bytes: ...

    @overload
    async def read_file(self, path: str, encoding: str) -> str: ...

    async def read_file(self, path: str, encoding: str | None = None) -> str | bytes:
        full_path = validate_path_in_root(self._root_dir, path)
        if not full_path.is_file():
            raise VirtualFsError.file_not_found(path)
        if encoding is None:
            return await _run_sync(full_path.read_bytes)
        return await _run_sync(full_path.read_text, encoding=encoding)

    def _write_sync(self, full_path: Path, data: str | bytes) -> None:
        full_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, bytes):
            full_path.write_bytes(data)
        else:
            full_path.write_text(data, encoding="utf-8")

    async def write_file(self, path: str, data: str | bytes) -> None:
        full_path = validate_path_in_root(self._root_dir, path)
        await _run_sync(self._write_sync, full_path, data)
