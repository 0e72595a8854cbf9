"""Tests for the CLI entry point."""

from datetime import date

import pytest
from click.testing import CliRunner

from tolog.core.cli import main
from tolog.core.cli.common import parse_date_arg
from tolog.journal.dates import today_filename


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_args(tmp_path, monkeypatch):
    """Point the CLI at a throwaway data dir and journal."""
    monkeypatch.setenv("TOLOG_JOURNAL__SAVE_DELAY", "0.01")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return ["--config", str(tmp_path / "missing.yaml"), "--data-dir", str(tmp_path / "state")]


@pytest.fixture
def journal(tmp_path, runner, cli_args):
    path = tmp_path / "journal"
    result = runner.invoke(main, [*cli_args, "path", "set", str(path)])
    assert result.exit_code == 0, result.output
    return path


class TestCliGroup:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Tolog" in result.output
        for command in ("path", "today", "list", "show", "write", "watch"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestConfigErrors:
    def test_bad_env_number_is_a_clean_error(self, runner, cli_args, monkeypatch):
        monkeypatch.setenv("TOLOG_JOURNAL__SAVE_DELAY", "soon")
        result = runner.invoke(main, [*cli_args, "list"])
        assert result.exit_code == 1
        assert "journal.save_delay must be a number" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_invalid_config_file_is_a_clean_error(self, runner, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("journal: [unclosed")
        result = runner.invoke(main, ["--config", str(config_path), "--data-dir", str(tmp_path / "state"), "today"])
        assert result.exit_code == 1
        assert "Invalid config file" in result.output


class TestPathCommand:
    def test_default_path_is_home_journal(self, runner, cli_args, tmp_path):
        result = runner.invoke(main, [*cli_args, "path"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == str(tmp_path / "home" / "journal")
        assert (tmp_path / "home" / "journal").is_dir()

    def test_set_then_show(self, runner, cli_args, journal):
        assert journal.is_dir()
        result = runner.invoke(main, [*cli_args, "path", "show"])
        assert result.exit_code == 0
        assert result.output.strip() == str(journal)

    def test_set_reports_entries(self, runner, cli_args, tmp_path):
        other = tmp_path / "other"
        other.mkdir()
        (other / "2024_03_15.md").write_text("x")
        result = runner.invoke(main, [*cli_args, "path", "set", str(other)])
        assert result.exit_code == 0
        assert "1 entries found" in result.output


class TestEntryCommands:
    def test_write_and_show(self, runner, cli_args, journal):
        result = runner.invoke(main, [*cli_args, "write", "Hello World", "--date", "2024-03-15"])
        assert result.exit_code == 0, result.output
        assert (journal / "2024_03_15.md").read_text(encoding="utf-8") == "Hello World"

        result = runner.invoke(main, [*cli_args, "show", "2024_03_15.md"])
        assert result.exit_code == 0
        assert "Hello World" in result.output

    def test_write_append(self, runner, cli_args, journal):
        (journal / "2024_03_15.md").write_text("first line\n", encoding="utf-8")
        result = runner.invoke(main, [*cli_args, "write", "second line", "-d", "2024-03-15", "--append"])
        assert result.exit_code == 0, result.output
        assert (journal / "2024_03_15.md").read_text(encoding="utf-8") == "first line\nsecond line"

    def test_write_defaults_to_today(self, runner, cli_args, journal):
        result = runner.invoke(main, [*cli_args, "write", "today's thoughts"])
        assert result.exit_code == 0, result.output
        assert (journal / today_filename()).read_text(encoding="utf-8") == "today's thoughts"

    def test_show_missing_entry(self, runner, cli_args, journal):
        result = runner.invoke(main, [*cli_args, "show", "2024-03-15"])
        assert result.exit_code == 1

    def test_show_bad_date(self, runner, cli_args, journal):
        result = runner.invoke(main, [*cli_args, "show", "yesterday-ish"])
        assert result.exit_code == 2
        assert "YYYY-MM-DD" in result.output

    def test_list_orders_entries(self, runner, cli_args, journal):
        (journal / "2024_03_14.md").write_text("older entry")
        (journal / "2024_03_15.md").write_text("\n\nnewer entry\nmore")
        (journal / "notes.txt").write_text("ignored")

        result = runner.invoke(main, [*cli_args, "list"])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0].startswith("Mar 15th, 2024")
        assert "newer entry" in lines[0]
        assert lines[1].startswith("Mar 14th, 2024")
        assert len(lines) == 2

    def test_list_limit(self, runner, cli_args, journal):
        for day in (13, 14, 15):
            (journal / f"2024_03_{day}.md").write_text(str(day))
        result = runner.invoke(main, [*cli_args, "list", "-n", "1"])
        assert len(result.output.strip().splitlines()) == 1

    def test_list_empty(self, runner, cli_args, journal):
        result = runner.invoke(main, [*cli_args, "list"])
        assert "No entries yet." in result.output

    def test_today_empty(self, runner, cli_args, journal):
        result = runner.invoke(main, [*cli_args, "today"])
        assert result.exit_code == 0
        assert "nothing written yet" in result.output


class TestWatchCommand:
    def test_watch_help(self, runner):
        result = runner.invoke(main, ["watch", "--help"])
        assert result.exit_code == 0
        assert "Watch" in result.output


class TestParseDateArg:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2024-03-15", "2024_03_15.md"),
            ("2024_03_15", "2024_03_15.md"),
            ("2024_03_15.md", "2024_03_15.md"),
        ],
    )
    def test_accepted_forms(self, value, expected):
        assert parse_date_arg(value) == expected

    def test_today(self):
        assert parse_date_arg("today") == today_filename(date.today())
        assert parse_date_arg(None) == today_filename()
