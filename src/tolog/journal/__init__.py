"""Daily journal persistence and synchronization.

One ``YYYY_MM_DD.md`` file per day, loaded into an ordered in-memory store,
written back with per-day debouncing and reloaded when the directory
changes underneath us.
"""

from .dates import format_display_date, is_entry_filename, today_filename
from .loader import EntryLoader, load_entries
from .models import Entry, EntryCollection
from .paths import default_journal_path, ensure_journal_dir, resolve_journal_path
from .session import JournalSession
from .store import EntryStore
from .watcher import DirectoryWatcher, WatchHandle
from .writer import FileWriter

__all__ = [
    "DirectoryWatcher",
    "Entry",
    "EntryCollection",
    "EntryLoader",
    "EntryStore",
    "FileWriter",
    "JournalSession",
    "WatchHandle",
    "default_journal_path",
    "ensure_journal_dir",
    "format_display_date",
    "is_entry_filename",
    "load_entries",
    "resolve_journal_path",
    "today_filename",
]
