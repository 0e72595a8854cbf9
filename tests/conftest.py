"""Shared test fixtures for tolog."""

import contextlib
import os
import sys
import tempfile
from pathlib import Path

import pytest
from loguru import logger

from tolog.core.preferences import PreferenceStore
from tolog.core.storage import MemoryFileSystem


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "preferences_file": os.path.join(tmp_dir, "data", "prefs.yaml"),
        },
        "journal": {
            "save_delay": 0.05,
            "watch_interval": 0.05,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def journal_dir() -> Path:
    return Path("/journal")


@pytest.fixture
def memory_fs(journal_dir):
    """In-memory filesystem with an empty journal directory."""
    fs = MemoryFileSystem()
    fs.directories.add(journal_dir)
    fs.directories.update(journal_dir.parents)
    return fs


@pytest.fixture
def preferences(tmp_path):
    return PreferenceStore(tmp_path / "prefs.yaml")


@pytest.fixture
def log_messages():
    """Collect loguru records emitted during the test."""
    messages: list = []
    sink_id = logger.add(lambda msg: messages.append(msg.record), level="DEBUG")
    yield messages
    with contextlib.suppress(ValueError):
        logger.remove(sink_id)


@pytest.fixture(autouse=True)
def _restore_logging():
    """Commands reconfigure loguru; put the default stderr sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
