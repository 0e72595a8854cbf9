"""Core data models for the journal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as _date

from .dates import format_display_date, is_entry_filename, parse_entry_date


@dataclass(frozen=True)
class Entry:
    """One day's journal content.

    Attributes:
        date: Filename of the form ``YYYY_MM_DD.md``; the identity key.
        content: Full text of the file (may be empty).
    """

    date: str
    content: str = ""

    def __post_init__(self):
        if not isinstance(self.date, str) or not is_entry_filename(self.date):
            raise ValueError(f"Entry date must be a YYYY_MM_DD.md filename, got {self.date!r}")
        if not isinstance(self.content, str):
            raise ValueError("Entry content must be a string")

    @property
    def day(self) -> _date:
        return parse_entry_date(self.date)

    @property
    def display_date(self) -> str:
        return format_display_date(self.date)

    def __repr__(self) -> str:
        preview = self.content[:30] + "..." if len(self.content) > 30 else self.content
        return f"Entry(date='{self.date}', content='{preview}')"


EntryCollection = tuple[Entry, ...]
"""Entries ordered by ``date`` descending (most recent first)."""


def sort_entries(entries) -> EntryCollection:
    """Order entries most recent first.

    Lexicographic order on the zero-padded filename is chronological order.
    """
    return tuple(sorted(entries, key=lambda e: e.date, reverse=True))
