"""Entry loader — reads the journal directory into the entry store."""

from __future__ import annotations

from collections.abc import Callable, Collection

from loguru import logger

from tolog.core.exceptions import JournalDirectoryError
from tolog.core.storage import FileSystem, StorageError
from tolog.core.types import PathLike

from .dates import is_entry_filename
from .models import Entry, EntryCollection
from .paths import ensure_journal_dir
from .store import EntryStore

PendingFn = Callable[[], Collection[str]]
"""Returns the dates that have an unsaved edit in flight."""


class EntryLoader:
    """Populate an EntryStore from a directory of ``YYYY_MM_DD.md`` files.

    Loading never raises. Directory and listing failures leave the store
    untouched; a single unreadable file is skipped. An entry saved while the
    files are being read keeps its saved content over what was read.

    Args:
        fs: Filesystem capability.
        store: The store to replace on each successful load.
        pending: Dates whose in-memory content is newer than disk. Those
            entries keep their in-memory content across a reload.
    """

    def __init__(self, fs: FileSystem, store: EntryStore, pending: PendingFn | None = None):
        self.fs = fs
        self.store = store
        self._pending = pending or (lambda: ())

    async def load(self, path: PathLike) -> EntryCollection:
        before = {entry.date: entry for entry in self.store.entries}
        keep = set(self._pending())

        try:
            directory = await ensure_journal_dir(path, self.fs)
        except JournalDirectoryError:
            return self.store.entries

        try:
            names = await self.fs.list(directory)
        except StorageError as e:
            logger.error(f"Cannot list journal directory {directory}: {e}")
            return self.store.entries

        loaded: dict[str, Entry] = {}
        for name in sorted(n for n in names if is_entry_filename(n)):
            try:
                content = await self.fs.read(self.fs.join(directory, name))
            except StorageError as e:
                logger.warning(f"Skipping unreadable entry {name}: {e}")
                continue
            loaded[name] = Entry(date=name, content=content)

        # Edits saved while the files were being read are newer than what was read
        keep.update(self._pending())
        for entry in self.store.entries:
            if entry.date in keep or before.get(entry.date) is not entry:
                loaded[entry.date] = entry

        entries = self.store.replace(loaded.values())
        logger.debug(f"Loaded {len(entries)} entries from {directory}")
        return entries


async def load_entries(path: PathLike, fs: FileSystem, store: EntryStore | None = None) -> EntryCollection:
    """Load ``path`` into ``store`` (a fresh one if omitted) and return the entries."""
    return await EntryLoader(fs, store if store is not None else EntryStore()).load(path)
