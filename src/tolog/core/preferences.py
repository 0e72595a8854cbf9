"""
User preference storage.

A flat key-value store persisted as YAML. The journal core only reads and
writes ``journal_path``; ``theme`` and ``font_size`` belong to the display
layer and are kept here with their bounds so every front end agrees on them.

Expected format:
    journal_path: /home/me/journal
    theme: "#002B36"
    font_size: 16
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

JOURNAL_PATH_KEY = "journal_path"
THEME_KEY = "theme"
FONT_SIZE_KEY = "font_size"

DEFAULT_FONT_SIZE = 16
MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 32
FONT_SIZE_STEP = 2


@dataclass(frozen=True)
class Theme:
    name: str
    color: str
    text_color: str


THEMES: tuple[Theme, ...] = (
    Theme("Solarized Dark", "#002B36", "#93A1A1"),
    Theme("White", "#ffffff", "#000000"),
    Theme("Solarized Light", "#FDF6E3", "#657B83"),
    Theme("Charcoal", "#1E1E1E", "#D4D4D4"),
)
DEFAULT_THEME = THEMES[0].color


class PreferenceStore:
    """Key-value preferences backed by a YAML file.

    The file is read lazily on first access and rewritten on every ``set``.
    A missing file is an empty store; an unreadable one is logged and
    treated as empty.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path).expanduser()
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            self._data = {}
            if self._path.exists():
                try:
                    with open(self._path, encoding="utf-8") as f:
                        data = yaml.safe_load(f) or {}
                    if isinstance(data, dict):
                        self._data = data
                    else:
                        logger.warning(f"Ignoring preferences in {self._path}: expected a mapping")
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Could not load preferences from {self._path}: {e}")
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store a value and persist the whole file."""
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        logger.debug(f"Preference {key} updated")


class Preferences:
    """Typed accessors over a PreferenceStore for the display settings."""

    def __init__(self, store: PreferenceStore):
        self.store = store

    @property
    def journal_path(self) -> str:
        return self.store.get(JOURNAL_PATH_KEY) or ""

    @property
    def font_size(self) -> int:
        try:
            size = int(self.store.get(FONT_SIZE_KEY, DEFAULT_FONT_SIZE))
        except (TypeError, ValueError):
            return DEFAULT_FONT_SIZE
        return min(max(size, MIN_FONT_SIZE), MAX_FONT_SIZE)

    def increment_font_size(self) -> int:
        """Grow the font by one step. Does nothing at the upper bound."""
        size = self.font_size
        if size + FONT_SIZE_STEP <= MAX_FONT_SIZE:
            size += FONT_SIZE_STEP
            self.store.set(FONT_SIZE_KEY, size)
        return size

    def decrement_font_size(self) -> int:
        """Shrink the font by one step. Does nothing at the lower bound."""
        size = self.font_size
        if size - FONT_SIZE_STEP >= MIN_FONT_SIZE:
            size -= FONT_SIZE_STEP
            self.store.set(FONT_SIZE_KEY, size)
        return size

    @property
    def theme(self) -> Theme:
        color = self.store.get(THEME_KEY, DEFAULT_THEME)
        for theme in THEMES:
            if theme.color.lower() == str(color).lower():
                return theme
        return THEMES[0]

    def select_theme(self, color: str) -> Theme:
        for theme in THEMES:
            if theme.color.lower() == color.lower():
                self.store.set(THEME_KEY, theme.color)
                return theme
        raise ValueError(f"Unknown theme color: {color}")
