"""Resolve and create the active journal directory."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from tolog.core.exceptions import JournalDirectoryError
from tolog.core.preferences import JOURNAL_PATH_KEY, PreferenceStore
from tolog.core.storage import FileSystem, StorageError
from tolog.core.types import PathLike

DEFAULT_JOURNAL_DIR_NAME = "journal"


def default_journal_path() -> Path:
    return Path.home() / DEFAULT_JOURNAL_DIR_NAME


def normalize_journal_path(path: PathLike) -> Path:
    return Path(path).expanduser().absolute()


async def ensure_journal_dir(path: PathLike, fs: FileSystem) -> Path:
    """Create ``path`` recursively if it does not exist.

    Raises:
        JournalDirectoryError: If the directory cannot be created.
    """
    path = normalize_journal_path(path)
    try:
        if not await fs.exists(path):
            logger.info(f"Creating journal directory {path}")
            await fs.mkdir(path)
    except StorageError as e:
        logger.error(f"Cannot create journal directory {path}: {e}")
        raise JournalDirectoryError(f"Cannot create journal directory {path}: {e}") from e
    return path


async def resolve_journal_path(preferences: PreferenceStore, fs: FileSystem) -> Path:
    """Return the journal directory, creating it if needed.

    The stored ``journal_path`` preference wins when set and non-empty;
    otherwise ``~/journal``.
    """
    stored = preferences.get(JOURNAL_PATH_KEY)
    if isinstance(stored, str) and stored.strip():
        path = normalize_journal_path(stored.strip())
    else:
        path = default_journal_path()
    logger.debug(f"Resolved journal path {path}")
    return await ensure_journal_dir(path, fs)
