"""
In-memory filesystem backend.

A drop-in FileSystem for tests and dry runs. Tracks write counts and can be
told to fail reads or writes on specific paths.
"""

import asyncio
import itertools
from pathlib import Path

from tolog.core.types import PathLike, Snapshot

from .base import FileSystem, StorageKeyError, StoragePermissionError


class MemoryFileSystem(FileSystem):
    """FileSystem that keeps files in a dict keyed by absolute path."""

    def __init__(self, files: dict[PathLike, str] | None = None):
        self.files: dict[Path, str] = {}
        self.directories: set[Path] = set()
        self.write_count = 0
        self.writes: list[tuple[Path, str]] = []
        self.fail_reads: set[Path] = set()
        self.fail_writes: set[Path] = set()
        self.fail_mkdir: set[Path] = set()
        self._clock = itertools.count(1)
        self._mtimes: dict[Path, int] = {}
        for path, content in (files or {}).items():
            self.put(path, content)

    def put(self, path: PathLike, content: str) -> None:
        """Set a file's content without counting it as a write."""
        path = Path(path)
        self.directories.update(path.parents)
        self.files[path] = content
        self._mtimes[path] = next(self._clock)

    def remove(self, path: PathLike) -> None:
        path = Path(path)
        self.files.pop(path, None)
        self._mtimes.pop(path, None)

    async def list(self, directory: PathLike) -> list[str]:
        await asyncio.sleep(0)
        directory = Path(directory)
        if directory not in self.directories:
            raise StorageKeyError(f"Directory not found: {directory}")
        return [p.name for p in self.files if p.parent == directory]

    async def read(self, path: PathLike) -> str:
        await asyncio.sleep(0)
        path = Path(path)
        if path in self.fail_reads:
            raise StoragePermissionError(f"Cannot read {path}: permission denied")
        if path not in self.files:
            raise StorageKeyError(f"File not found: {path}")
        return self.files[path]

    async def write(self, path: PathLike, content: str) -> None:
        await asyncio.sleep(0)
        path = Path(path)
        if path in self.fail_writes:
            raise StoragePermissionError(f"Cannot write to {path}: permission denied")
        if path.parent not in self.directories:
            raise StorageKeyError(f"Directory not found: {path.parent}")
        self.put(path, content)
        self.write_count += 1
        self.writes.append((path, content))

    async def exists(self, path: PathLike) -> bool:
        path = Path(path)
        return path in self.files or path in self.directories

    async def mkdir(self, path: PathLike) -> None:
        path = Path(path)
        if path in self.fail_mkdir:
            raise StoragePermissionError(f"Cannot create {path}: permission denied")
        self.directories.add(path)
        self.directories.update(path.parents)

    async def snapshot(self, directory: PathLike) -> Snapshot:
        names = await self.list(directory)
        directory = Path(directory)
        return {
            name: (self._mtimes[directory / name], len(self.files[directory / name].encode("utf-8")))
            for name in names
        }
