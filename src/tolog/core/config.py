"""
Tolog configuration.

Three layers, later ones winning:
    1. Built-in defaults, rooted at the state directory (``~/.tolog``)
    2. A YAML or JSON config file
    3. ``TOLOG_<SECTION>__<KEY>`` environment variables

    config = Config(config_file="~/.tolog/config.yaml")
    config.get_float("journal.save_delay", DEFAULT_SAVE_DELAY)
"""

import copy
import json
import os
from typing import Any

import yaml

from tolog.core.exceptions import ConfigurationError
from tolog.core.types import ConfigDict

ENV_PREFIX = "TOLOG_"
STATE_DIR_NAME = ".tolog"

DEFAULT_SAVE_DELAY = 0.3
DEFAULT_WATCH_INTERVAL = 0.5


def default_settings(state_dir: str) -> ConfigDict:
    """Defaults for a given state directory; logs and preferences live under it."""
    return {
        "paths": {
            "data_dir": state_dir,
            "log_dir": os.path.join(state_dir, "logs"),
            "preferences_file": os.path.join(state_dir, "preferences.yaml"),
        },
        "journal": {
            "save_delay": DEFAULT_SAVE_DELAY,
            "watch_interval": DEFAULT_WATCH_INTERVAL,
        },
        "logging": {
            "level": "WARNING",
            "file": "",
        },
    }


def merge_settings(base: ConfigDict, overlay: ConfigDict) -> None:
    """Merge ``overlay`` into ``base`` in place, section by section."""
    for key, value in overlay.items():
        existing = base.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            merge_settings(existing, value)
        else:
            base[key] = value


def read_settings_file(path: str) -> ConfigDict:
    """Parse a ``.yaml``/``.yml`` or ``.json`` settings file.

    Other extensions are ignored. A file that does not parse, or does not
    hold a mapping, raises ConfigurationError.
    """
    ext = os.path.splitext(path)[1].lower()
    if ext not in (".yaml", ".yml", ".json"):
        return {}
    try:
        with open(path) as f:
            data = json.load(f) if ext == ".json" else yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def env_settings(prefix: str, environ: dict[str, str] | None = None) -> ConfigDict:
    """Collect ``<prefix>SECTION__KEY=value`` variables into nested settings.

    Values stay strings; callers coerce with :meth:`Config.get_float`.
    """
    settings: ConfigDict = {}
    if not prefix:
        return settings
    for name, value in (os.environ if environ is None else environ).items():
        if not name.startswith(prefix):
            continue
        *sections, leaf = name[len(prefix) :].lower().split("__")
        node = settings
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = value
    return settings


class Config:
    """Merged settings for one tolog process.

    Args:
        config_file: YAML or JSON file; a missing file is skipped.
        env_prefix: Environment variable prefix. Empty disables env overrides.
        data_dir: State directory. Defaults to ``~/.tolog``.
        defaults: Extra values layered over the built-in defaults.
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = ENV_PREFIX,
        data_dir: str | None = None,
        defaults: ConfigDict | None = None,
    ):
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""
        state_dir = os.path.expanduser(data_dir or os.path.join("~", STATE_DIR_NAME))

        self.config_data = default_settings(state_dir)
        if defaults:
            merge_settings(self.config_data, copy.deepcopy(defaults))
        if self.config_file and os.path.exists(self.config_file):
            merge_settings(self.config_data, read_settings_file(self.config_file))
        merge_settings(self.config_data, env_settings(self.env_prefix))

    def get(self, key_path: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``journal.save_delay``."""
        node: Any = self.config_data
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_float(self, key_path: str, default: float) -> float:
        """Numeric lookup; env overrides arrive as strings."""
        value = self.get(key_path, default)
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{key_path} must be a number, got {value!r}") from e

    def set(self, key_path: str, value: Any) -> None:
        *sections, leaf = key_path.split(".")
        node = self.config_data
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = value
