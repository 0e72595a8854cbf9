"""tolog watch — keep the journal open and report external changes."""

from __future__ import annotations

import asyncio

import click


@click.command()
@click.pass_obj
def watch(obj: dict) -> None:
    """Watch the journal directory and report when entries change."""
    from tolog.core.cli.common import create_app

    app = create_app(obj, watch=True)

    click.echo("Watching journal directory...")
    click.echo("Press Ctrl+C to stop.\n")
    try:
        asyncio.run(_watch(app))
    except KeyboardInterrupt:
        click.echo("\nStopped.")


async def _watch(app) -> None:  # type: ignore[no-untyped-def]
    async with app:
        session = app.session
        click.echo(f"{session.path}: {len(session.entries)} entries")
        if not session.watching:
            click.echo("Live change detection is unavailable.", err=True)
            return
        seen = session.entries
        interval = session.watch_interval
        while session.watching:
            await asyncio.sleep(interval)
            if session.entries is not seen:
                seen = session.entries
                latest = seen[0].display_date if seen else "none"
                click.echo(f"Reloaded: {len(seen)} entries (latest {latest})")
