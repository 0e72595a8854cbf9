"""Journal session — one open journal directory with live reload.

Wires the path resolver, loader, writer and watcher together:

    async with JournalSession(LocalFileSystem(), preferences) as session:
        await session.save(today_filename(), "Dear diary")
        for entry in session.entries:
            print(entry.display_date)
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from tolog.core.config import DEFAULT_SAVE_DELAY, DEFAULT_WATCH_INTERVAL
from tolog.core.exceptions import JournalDirectoryError
from tolog.core.preferences import JOURNAL_PATH_KEY, PreferenceStore
from tolog.core.storage import FileSystem
from tolog.core.types import PathLike

from .loader import EntryLoader
from .models import Entry, EntryCollection
from .paths import ensure_journal_dir, normalize_journal_path, resolve_journal_path
from .store import EntryStore
from .watcher import DirectoryWatcher, WatchHandle
from .writer import FileWriter


class JournalSession:
    """Owns the entry store for the active journal directory.

    Args:
        fs: Filesystem capability shared by every component.
        preferences: Store holding the ``journal_path`` preference.
        save_delay: Debounce window for writes, in seconds.
        watch_interval: Directory poll interval, in seconds.
        watch: Set False to skip live change detection.
    """

    def __init__(
        self,
        fs: FileSystem,
        preferences: PreferenceStore,
        *,
        save_delay: float = DEFAULT_SAVE_DELAY,
        watch_interval: float = DEFAULT_WATCH_INTERVAL,
        watch: bool = True,
    ):
        self.fs = fs
        self.preferences = preferences
        self.store = EntryStore()
        self.path: Path | None = None
        self._save_delay = save_delay
        self.watch_interval = watch_interval
        self._watch_enabled = watch
        self._watcher = DirectoryWatcher(fs, interval=watch_interval)
        self._handle: WatchHandle | None = None
        self._writer: FileWriter | None = None
        self._loader = EntryLoader(fs, self.store, pending=self._pending_dates)

    # ── Lifecycle ──────────────────────────────────────────────────

    async def open(self) -> EntryCollection:
        """Resolve the journal directory, load it and start watching.

        A directory that cannot be created leaves the session empty and
        unwatched rather than raising.
        """
        try:
            path = await resolve_journal_path(self.preferences, self.fs)
        except JournalDirectoryError:
            return self.store.entries
        return await self._attach(path)

    async def close(self) -> None:
        """Flush pending writes and release the directory watch."""
        if self._writer is not None:
            await self._writer.close()
        await self._detach_watch()
        logger.debug("Journal session closed")

    async def __aenter__(self) -> JournalSession:
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ── Entries ────────────────────────────────────────────────────

    @property
    def entries(self) -> EntryCollection:
        return self.store.entries

    @property
    def watching(self) -> bool:
        return self._handle is not None and not self._handle.closed

    @property
    def writer(self) -> FileWriter | None:
        return self._writer

    def get(self, date: str) -> Entry | None:
        return self.store.get(date)

    async def save(self, date: str, content: str) -> None:
        """Update an entry in memory and schedule the debounced write."""
        if self._writer is None:
            logger.warning(f"No journal directory open, {date} kept in memory only")
            self.store.patch(date, content)
            return
        await self._writer.save(Entry(date=date, content=content))

    async def reload(self) -> EntryCollection:
        if self.path is None:
            return self.store.entries
        return await self._loader.load(self.path)

    # ── Directory selection ────────────────────────────────────────

    async def set_journal_path(self, path: PathLike | None) -> bool:
        """Switch to a new journal directory chosen by the user.

        Returns False (and changes nothing) for an empty choice, which is
        what a cancelled directory picker hands over.
        """
        if path is None or not str(path).strip():
            logger.debug("Journal path selection cancelled")
            return False

        new_path = normalize_journal_path(str(path).strip())
        try:
            await ensure_journal_dir(new_path, self.fs)
        except JournalDirectoryError:
            return False

        if self._writer is not None:
            await self._writer.flush()
        await self._detach_watch()

        self.preferences.set(JOURNAL_PATH_KEY, str(new_path))
        logger.info(f"Journal path set to {new_path}")
        resolved = await resolve_journal_path(self.preferences, self.fs)
        self.store.replace(())
        await self._attach(resolved)
        return True

    # ── Internal ───────────────────────────────────────────────────

    async def _attach(self, path: Path) -> EntryCollection:
        self.path = path
        self._writer = FileWriter(self.fs, self.store, path, delay=self._save_delay)
        entries = await self._loader.load(path)
        if self._watch_enabled:
            self._handle = await self._watcher.watch(path, self.reload)
        return entries

    async def _detach_watch(self) -> None:
        if self._handle is not None:
            await self._handle.close()
            self._handle = None

    def _pending_dates(self) -> frozenset[str]:
        return self._writer.pending if self._writer is not None else frozenset()
