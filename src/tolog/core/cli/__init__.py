"""Tolog CLI — entry point for the journal commands."""

import click

from tolog import __version__


@click.group()
@click.version_option(version=__version__, package_name="tolog")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="YAML or JSON config file.")
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Where preferences and logs live.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_dir: str | None, verbose: bool) -> None:
    """Tolog — a daily markdown journal."""
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file
    ctx.obj["data_dir"] = data_dir
    ctx.obj["verbose"] = verbose


# Register subcommands
from .entry_cmd import list_entries, show, today, write
from .path_cmd import path
from .watch_cmd import watch

main.add_command(path)
main.add_command(today)
main.add_command(list_entries)
main.add_command(show)
main.add_command(write)
main.add_command(watch)
