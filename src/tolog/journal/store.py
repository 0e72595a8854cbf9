"""In-memory entry store.

Owns the ordered collection of loaded entries. The collection is an
immutable tuple swapped under a lock, so readers always see either the old
or the new collection, never a partially-built one.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator

from .models import Entry, EntryCollection, sort_entries


class EntryStore:
    """Authoritative in-memory collection of journal entries keyed by filename."""

    def __init__(self, entries: Iterable[Entry] = ()):
        self._lock = threading.Lock()
        self._entries: EntryCollection = ()
        if entries:
            self.replace(entries)

    @property
    def entries(self) -> EntryCollection:
        return self._entries

    def replace(self, entries: Iterable[Entry]) -> EntryCollection:
        """Swap in a new collection wholesale.

        Raises:
            ValueError: If two entries share a date.
        """
        ordered = sort_entries(entries)
        dates = [e.date for e in ordered]
        if len(dates) != len(set(dates)):
            raise ValueError("Duplicate entry dates in collection")
        with self._lock:
            self._entries = ordered
        return ordered

    def patch(self, date: str, content: str) -> Entry:
        """Update one entry's content in place, inserting it if new."""
        updated = Entry(date=date, content=content)
        with self._lock:
            entries = list(self._entries)
            for i, entry in enumerate(entries):
                if entry.date == date:
                    entries[i] = updated
                    break
            else:
                entries.append(updated)
                entries = list(sort_entries(entries))
            self._entries = tuple(entries)
        return updated

    def get(self, date: str) -> Entry | None:
        for entry in self._entries:
            if entry.date == date:
                return entry
        return None

    def __contains__(self, date: object) -> bool:
        return any(entry.date == date for entry in self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
