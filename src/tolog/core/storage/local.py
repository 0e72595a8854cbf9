"""
Local filesystem backend.

Provides async file operations on top of aiofiles.
"""

from pathlib import Path

import aiofiles
import aiofiles.os

from tolog.core.types import PathLike, Snapshot

from .base import FileSystem, StorageError, StorageKeyError, StoragePermissionError


class LocalFileSystem(FileSystem):
    """FileSystem backed by the local disk."""

    async def list(self, directory: PathLike) -> list[str]:
        directory = Path(directory)
        try:
            names = await aiofiles.os.listdir(directory)
        except FileNotFoundError as e:
            raise StorageKeyError(f"Directory not found: {directory}") from e
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot list {directory}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot list {directory}: {e}") from e

        files = []
        for name in names:
            if await aiofiles.os.path.isfile(directory / name):
                files.append(name)
        return files

    async def read(self, path: PathLike) -> str:
        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                return await f.read()
        except FileNotFoundError as e:
            raise StorageKeyError(f"File not found: {path}") from e
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    async def write(self, path: PathLike, content: str) -> None:
        try:
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(content)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot write to {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot write to {path}: {e}") from e

    async def exists(self, path: PathLike) -> bool:
        return await aiofiles.os.path.exists(path)

    async def mkdir(self, path: PathLike) -> None:
        try:
            await aiofiles.os.makedirs(path, exist_ok=True)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot create {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot create {path}: {e}") from e

    async def snapshot(self, directory: PathLike) -> Snapshot:
        directory = Path(directory)
        result: Snapshot = {}
        for name in await self.list(directory):
            try:
                stat = await aiofiles.os.stat(directory / name)
            except FileNotFoundError:
                # Removed between listing and stat
                continue
            result[name] = (stat.st_mtime_ns, stat.st_size)
        return result
