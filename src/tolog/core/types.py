"""Shared type aliases used across tolog."""

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

# Config value types
ConfigDict = dict[str, Any]

# Path types
PathLike = str | Path

# Directory signature: file name -> (mtime_ns, size)
Snapshot = dict[str, tuple[int, int]]

# Watcher callback, sync or async
ChangeCallback = Callable[[], Awaitable[None] | None]
