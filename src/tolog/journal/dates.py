"""Filename and date helpers for ``YYYY_MM_DD.md`` journal files."""

from __future__ import annotations

import re
from datetime import date

ENTRY_SUFFIX = ".md"
ENTRY_FILENAME_RE = re.compile(r"^(\d{4})_(\d{2})_(\d{2})\.md$")

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip


def is_entry_filename(name: str) -> bool:
    """True for names of the form ``YYYY_MM_DD.md`` that name a real date."""
    try:
        parse_entry_date(name)
    except ValueError:
        return False
    return True


def filename_for(day: date) -> str:
    return f"{day.year:04d}_{day.month:02d}_{day.day:02d}{ENTRY_SUFFIX}"


def today_filename(today: date | None = None) -> str:
    """Filename for the current local date, e.g. ``2024_03_15.md``."""
    return filename_for(today or date.today())


def parse_entry_date(filename: str) -> date:
    """Parse the date out of an entry filename.

    Raises:
        ValueError: If the name is not ``YYYY_MM_DD.md`` or not a real date.
    """
    match = ENTRY_FILENAME_RE.match(filename)
    if not match:
        raise ValueError(f"Not a journal filename: {filename!r}")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_display_date(filename: str) -> str:
    """Render ``2024_03_15.md`` as ``Mar 15th, 2024``."""
    day = parse_entry_date(filename)
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.day}{ordinal_suffix(day.day)}, {day.year}"
