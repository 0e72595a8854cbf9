"""Application context — process-wide lifecycle for a tolog front end.

Created once at startup and passed explicitly to whatever needs it (CLI
commands, a window shell). ``start()`` is the on-ready hook, ``stop()`` the
all-windows-closed hook.
"""

from __future__ import annotations

from loguru import logger

from tolog.core.config import DEFAULT_SAVE_DELAY, DEFAULT_WATCH_INTERVAL, Config
from tolog.core.preferences import PreferenceStore, Preferences
from tolog.core.storage import FileSystem, LocalFileSystem
from tolog.core.utils.logging import configure_logging as apply_logging_config
from tolog.journal.session import JournalSession

APP_NAME = "Tolog"


class AppContext:
    """Holds config, preferences and the journal session for one process.

    Args:
        config: Loaded configuration.
        fs: Filesystem capability; local disk unless a fake is injected.
        watch: Whether the session watches the directory for changes.
        configure_logging: Set False when the caller already set up loguru.
    """

    def __init__(
        self,
        config: Config,
        fs: FileSystem | None = None,
        *,
        watch: bool = True,
        configure_logging: bool = True,
    ):
        self.config = config
        self.fs = fs or LocalFileSystem()
        self.preference_store = PreferenceStore(config.get("paths.preferences_file"))
        self.preferences = Preferences(self.preference_store)
        self.session = JournalSession(
            self.fs,
            self.preference_store,
            save_delay=config.get_float("journal.save_delay", DEFAULT_SAVE_DELAY),
            watch_interval=config.get_float("journal.watch_interval", DEFAULT_WATCH_INTERVAL),
            watch=watch,
        )
        self._configure_logging = configure_logging
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> JournalSession:
        if self._started:
            return self.session
        if self._configure_logging:
            apply_logging_config(self.config)
        await self.session.open()
        self._started = True
        logger.info(f"{APP_NAME} started with journal at {self.session.path}")
        return self.session

    async def stop(self) -> None:
        if not self._started:
            return
        await self.session.close()
        self._started = False
        logger.info(f"{APP_NAME} stopped")

    async def __aenter__(self) -> AppContext:
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
