"""Directory watcher — polls the journal directory for external changes.

Each tick takes a ``{name: (mtime_ns, size)}`` snapshot of the directory and
compares it with the previous one. Any difference (a file created, modified,
renamed or deleted) fires the change callback once; the callback is expected
to reload everything, so the kind of change does not matter.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
from pathlib import Path

from loguru import logger

from tolog.core.config import DEFAULT_WATCH_INTERVAL
from tolog.core.storage import FileSystem, StorageError
from tolog.core.types import ChangeCallback, PathLike, Snapshot


class WatchHandle:
    """Handle for one active watch. ``close()`` stops further callbacks."""

    def __init__(self, path: Path):
        self.path = path
        self._task: asyncio.Task | None = None
        self._closed = True

    def _attach(self, task: asyncio.Task) -> None:
        self._task = task
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        logger.debug(f"Stopped watching {self.path}")


class DirectoryWatcher:
    """Poll-based watcher for a flat directory.

    Args:
        fs: Filesystem capability used to snapshot the directory.
        interval: Seconds between polls.
    """

    def __init__(self, fs: FileSystem, interval: float = DEFAULT_WATCH_INTERVAL):
        self.fs = fs
        self.interval = interval

    async def watch(self, path: PathLike, on_change: ChangeCallback) -> WatchHandle:
        """Start watching ``path``.

        If the directory cannot be read the failure is logged and an
        already-closed handle is returned; the caller carries on without
        live change detection.
        """
        directory = Path(path)
        try:
            baseline = await self.fs.snapshot(directory)
        except StorageError as e:
            logger.warning(f"Cannot watch {directory}, external changes will not be picked up: {e}")
            return WatchHandle(directory)

        handle = WatchHandle(directory)
        task = asyncio.create_task(
            self._poll(handle, directory, on_change, baseline),
            name=f"tolog-watch-{directory.name}",
        )
        handle._attach(task)
        logger.debug(f"Watching {directory} every {self.interval}s")
        return handle

    async def _poll(self, handle: WatchHandle, directory: Path, on_change: ChangeCallback, previous: Snapshot) -> None:
        failing = False
        while not handle.closed:
            await asyncio.sleep(self.interval)
            try:
                current = await self.fs.snapshot(directory)
                failing = False
            except StorageError as e:
                if not failing:
                    logger.warning(f"Cannot read watched directory {directory}: {e}")
                failing = True
                current = {}

            if current == previous:
                continue
            previous = current
            if handle.closed:
                return
            # A reload that has started finishes even if the handle closes
            await asyncio.shield(self._notify(on_change, directory))

    @staticmethod
    async def _notify(on_change: ChangeCallback, directory: Path) -> None:
        logger.debug(f"Change detected in {directory}")
        try:
            result = on_change()
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(f"Change handler failed for {directory}")
