"""tolog today / list / show / write — read and edit entries."""

from __future__ import annotations

import asyncio

import click

from tolog.core.cli.common import create_app, parse_date_arg


def _preview(content: str, width: int = 60) -> str:
    for line in content.splitlines():
        line = line.strip()
        if line:
            return line if len(line) <= width else line[: width - 3] + "..."
    return "(empty)"


@click.command()
@click.pass_obj
def today(obj: dict) -> None:
    """Show today's entry."""
    from tolog.journal.dates import format_display_date, today_filename

    app = create_app(obj)
    filename = today_filename()

    async def _load():
        async with app:
            return app.session.get(filename)

    entry = asyncio.run(_load())
    click.echo(format_display_date(filename))
    click.echo(entry.content if entry and entry.content else "(nothing written yet)")


@click.command("list")
@click.option("-n", "--limit", type=int, default=None, help="Show at most this many entries.")
@click.pass_obj
def list_entries(obj: dict, limit: int | None) -> None:
    """List entries, most recent first."""
    app = create_app(obj)

    async def _load():
        async with app:
            return app.session.entries

    entries = asyncio.run(_load())
    if not entries:
        click.echo("No entries yet.")
        return
    for entry in (entries[:limit] if limit else entries):
        click.echo(f"{entry.display_date:<16} {_preview(entry.content)}")


@click.command()
@click.argument("date")
@click.pass_obj
def show(obj: dict, date: str) -> None:
    """Print the entry for DATE (YYYY-MM-DD, YYYY_MM_DD.md or 'today')."""
    filename = parse_date_arg(date)
    app = create_app(obj)

    async def _load():
        async with app:
            return app.session.get(filename)

    entry = asyncio.run(_load())
    if entry is None:
        click.echo(f"No entry for {filename}.", err=True)
        raise SystemExit(1)
    click.echo(entry.content)


@click.command()
@click.argument("text")
@click.option("-d", "--date", "date_arg", default=None, help="Entry date, defaults to today.")
@click.option("-a", "--append", is_flag=True, help="Add TEXT on a new line instead of replacing.")
@click.pass_obj
def write(obj: dict, text: str, date_arg: str | None, append: bool) -> None:
    """Write TEXT to an entry."""
    filename = parse_date_arg(date_arg)
    app = create_app(obj)

    async def _write():
        async with app:
            if app.session.path is None:
                return None
            content = text
            existing = app.session.get(filename)
            if append and existing and existing.content:
                content = existing.content.rstrip("\n") + "\n" + text
            await app.session.save(filename, content)
            await app.session.writer.flush()
            return app.session.writer.errors.get(filename)

    error = asyncio.run(_write())
    if app.session.path is None:
        click.echo("Journal directory is unavailable.", err=True)
        raise SystemExit(1)
    if error is not None:
        click.echo(f"Could not save {filename}: {error}", err=True)
        raise SystemExit(1)
    click.echo(f"Saved {filename}")
