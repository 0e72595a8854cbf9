"""
Abstract base class for filesystem backends.

The journal components never touch ``os`` or ``open`` directly; they are
handed a FileSystem so tests can substitute an in-memory fake.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from tolog.core.types import PathLike, Snapshot


class FileSystem(ABC):
    """Async capability interface over a flat directory of text files."""

    @abstractmethod
    async def list(self, directory: PathLike) -> list[str]:
        """Return the names of regular files directly inside ``directory``."""

    @abstractmethod
    async def read(self, path: PathLike) -> str:
        """Read a UTF-8 text file. Raises StorageKeyError if missing."""

    @abstractmethod
    async def write(self, path: PathLike, content: str) -> None:
        """Overwrite a file with UTF-8 text."""

    @abstractmethod
    async def exists(self, path: PathLike) -> bool:
        """Check if a path exists."""

    @abstractmethod
    async def mkdir(self, path: PathLike) -> None:
        """Create a directory and its parents. No-op if it already exists."""

    @abstractmethod
    async def snapshot(self, directory: PathLike) -> Snapshot:
        """Return ``{name: (mtime_ns, size)}`` for the files in ``directory``."""

    @staticmethod
    def join(directory: PathLike, name: str) -> Path:
        return Path(directory) / name


class StorageError(Exception):
    """Base exception for storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a path doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised when a storage operation is not permitted."""
