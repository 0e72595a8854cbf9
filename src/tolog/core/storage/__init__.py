"""
Filesystem backends for tolog.

Provides an async FileSystem capability with a local-disk implementation
(aiofiles) and an in-memory fake.
"""

from .base import (
    FileSystem,
    StorageError,
    StorageKeyError,
    StoragePermissionError,
)
from .local import LocalFileSystem
from .memory import MemoryFileSystem

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    "StorageError",
    "StorageKeyError",
    "StoragePermissionError",
]
