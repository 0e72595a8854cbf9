"""Shared setup logic for CLI commands."""

from __future__ import annotations

import re
from datetime import date

import click

from tolog.journal.dates import filename_for, is_entry_filename, today_filename

DEFAULT_CONFIG_PATH = "~/.tolog/config.yaml"

_ISO_DATE_RE = re.compile(r"^\d{4}[-_]\d{2}[-_]\d{2}$")


def load_config(obj: dict):
    """Build a Config from the options given to the ``tolog`` group."""
    from tolog.core.config import Config

    config = Config(config_file=obj.get("config_file") or DEFAULT_CONFIG_PATH, data_dir=obj.get("data_dir"))
    if obj.get("verbose"):
        config.set("logging.level", "DEBUG")
    return config


def create_app(obj: dict, *, watch: bool = False):
    """Create the AppContext for one command invocation."""
    from tolog.app import AppContext
    from tolog.core.exceptions import ConfigurationError

    try:
        return AppContext(load_config(obj), watch=watch)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def parse_date_arg(value: str | None) -> str:
    """Turn ``today``, ``2024-03-15``, ``2024_03_15`` or ``2024_03_15.md`` into a filename."""
    if value is None or value == "today":
        return today_filename()
    if is_entry_filename(value):
        return value
    if _ISO_DATE_RE.match(value):
        try:
            return filename_for(date.fromisoformat(value.replace("_", "-")))
        except ValueError:
            pass
    raise click.BadParameter(f"expected YYYY-MM-DD or YYYY_MM_DD.md, got {value!r}")
