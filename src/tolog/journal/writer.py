"""Debounced entry writer.

Every ``save`` updates the entry store right away and (re)starts a per-date
timer. When the timer fires the latest content is written to disk in one
go; saves that arrive inside the window replace the pending content instead
of queueing another write. Different dates are debounced independently.
"""

from __future__ import annotations

import asyncio
from collections import Counter, defaultdict
from pathlib import Path

from loguru import logger

from tolog.core.config import DEFAULT_SAVE_DELAY
from tolog.core.storage import FileSystem, StorageError
from tolog.core.types import PathLike

from .models import Entry
from .store import EntryStore


class FileWriter:
    """Persist entries to ``<directory>/<entry.date>``, coalescing rapid edits.

    Args:
        fs: Filesystem capability.
        store: Entry store patched on every save.
        directory: Journal directory the files live in.
        delay: Quiet period in seconds before a write happens.
    """

    def __init__(self, fs: FileSystem, store: EntryStore, directory: PathLike, delay: float = DEFAULT_SAVE_DELAY):
        self.fs = fs
        self.store = store
        self.directory = Path(directory)
        self.delay = delay
        self.errors: dict[str, StorageError] = {}
        self._tasks: dict[str, asyncio.Task] = {}
        self._pending: dict[str, tuple[Path, str]] = {}
        self._in_flight: Counter[str] = Counter()
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @property
    def pending(self) -> frozenset[str]:
        """Dates whose latest content has not reached disk yet."""
        return frozenset(self._pending) | frozenset(self._in_flight)

    async def save(self, entry: Entry) -> None:
        """Record ``entry`` in the store and schedule its write.

        Returns once the write is scheduled; use :meth:`wait` to wait for it.
        """
        self.store.patch(entry.date, entry.content)
        self._schedule(entry.date, entry.content, self.delay)

    async def wait(self, date: str | None = None) -> None:
        """Wait until the scheduled write for ``date`` (or every date) has finished."""
        while True:
            if date is None:
                tasks = [t for t in self._tasks.values() if not t.done()]
            else:
                task = self._tasks.get(date)
                tasks = [task] if task is not None and not task.done() else []
            if not tasks:
                return
            await asyncio.wait(tasks)

    async def flush(self) -> None:
        """Write everything still waiting out its delay, now."""
        for date, (_path, content) in list(self._pending.items()):
            self._schedule(date, content, 0)
        await self.wait()

    async def close(self) -> None:
        await self.flush()

    def _schedule(self, date: str, content: str, delay: float) -> None:
        previous = self._tasks.get(date)
        if previous is not None and not previous.done():
            previous.cancel()
        self._pending[date] = (self.fs.join(self.directory, date), content)
        self._tasks[date] = asyncio.create_task(self._write_later(date, delay), name=f"tolog-save-{date}")

    async def _write_later(self, date: str, delay: float) -> None:
        if delay:
            await asyncio.sleep(delay)
        path, content = self._pending.pop(date)
        # Once started, a write runs to completion even if superseded
        await asyncio.shield(self._write(date, path, content))

    async def _write(self, date: str, path: Path, content: str) -> None:
        self._in_flight[date] += 1
        try:
            async with self._locks[date]:
                try:
                    await self.fs.write(path, content)
                except StorageError as e:
                    self.errors[date] = e
                    logger.error(f"Failed to save {date}: {e}")
                    return
                self.errors.pop(date, None)
                logger.debug(f"Saved {date} ({len(content)} chars) to {path}")
        finally:
            self._in_flight[date] -= 1
            if self._in_flight[date] <= 0:
                del self._in_flight[date]
